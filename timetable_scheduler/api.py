"""
REST API for the timetable scheduler.
Provides HTTP endpoints to submit scheduling jobs and follow their progress.
"""
import os
import shutil
import uuid
import logging
import time
from threading import Thread
from typing import List

from dotenv import load_dotenv
from flask import Flask, request, jsonify, abort
from flask_cors import CORS
from werkzeug.utils import secure_filename

from .algorithms.feasibility import build_requirements
from .config import SchedulerConfig
from .data.converter import DataConverter
from .data.loader import ScheduleDataLoader
from .models.entities import Teacher, SchoolClass
from .scheduler import TimetableScheduler

logger = logging.getLogger(__name__)

load_dotenv()

# Create Flask app
app = Flask(__name__)
CORS(app)  # Enable CORS for all routes

# Configure app
app.config['UPLOAD_FOLDER'] = os.environ.get('UPLOAD_FOLDER', '/tmp/timetable/uploads')
app.config['MAX_SEARCH_SECONDS'] = float(os.environ.get('MAX_SEARCH_SECONDS', 300))
app.config['MAX_CONTENT_LENGTH'] = 16 * 1024 * 1024  # 16 MB limit

# Dictionary to store scheduling jobs
jobs = {}

FINISHED_STATUSES = ('completed', 'failed', 'cancelled', 'timed_out')


@app.route('/api/v1/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return jsonify({
        'status': 'healthy',
        'timestamp': time.time()
    })


@app.route('/api/v1/jobs', methods=['GET'])
def list_jobs():
    """List scheduling jobs."""
    return jsonify({
        'jobs': list(jobs.values())
    })


@app.route('/api/v1/jobs/<job_id>', methods=['GET'])
def get_job(job_id):
    """Get details of a specific job."""
    if job_id not in jobs:
        abort(404, description=f"Job {job_id} not found")

    return jsonify(jobs[job_id])


def run_schedule_job(job_id: str, teachers: List[Teacher], classes: List[SchoolClass],
                     config: SchedulerConfig, max_seconds: float):
    """
    Run a scheduling job in a separate thread.

    The search is resumed checkpoint by checkpoint; between checkpoints the
    job is stopped if cancellation was requested or the time limit passed.
    """
    job = jobs.get(job_id)
    if job is None:
        return

    job['status'] = 'processing'
    job['started_at'] = time.time()
    deadline = job['started_at'] + max_seconds if max_seconds > 0 else None

    def on_progress(percent):
        job['progress'] = percent

    scheduler = TimetableScheduler(config)
    steps = scheduler.generate_steps(teachers, classes, on_log=job['log'].append, on_progress=on_progress)

    try:
        while True:
            if job['cancel_requested']:
                steps.close()
                job.update({'status': 'cancelled', 'completed_at': time.time()})
                logger.info(f"Job {job_id} cancelled")
                return

            if deadline is not None and time.time() > deadline:
                steps.close()
                job.update({'status': 'timed_out', 'completed_at': time.time()})
                logger.warning(f"Job {job_id} exceeded {max_seconds} seconds")
                return

            try:
                next(steps)
            except StopIteration as stop:
                result = stop.value
                break

        job.update({
            'status': 'completed' if result.success else 'failed',
            'result': result.to_dict(),
            'completed_at': time.time()
        })

        logger.info(f"Job {job_id} completed with status: {job['status']}")

    except Exception as e:
        logger.error(f"Error in job {job_id}: {str(e)}")

        job.update({
            'status': 'failed',
            'error': str(e),
            'completed_at': time.time()
        })


def roster_from_uploads(job_id: str):
    """Save uploaded CSV files for a job and convert them to a roster."""
    files = request.files.getlist('files')
    if not files:
        abort(400, description="No roster provided")

    job_input_dir = os.path.join(app.config['UPLOAD_FOLDER'], job_id)
    os.makedirs(job_input_dir, exist_ok=True)

    for file in files:
        if file.filename:
            file.save(os.path.join(job_input_dir, secure_filename(file.filename)))

    data = ScheduleDataLoader(job_input_dir).load_all()
    converter = DataConverter()
    teachers = converter.convert_teachers(data['teachers'])
    classes = converter.convert_classes(data['classes'], data['class_subjects'])
    return teachers, classes, job_input_dir


@app.route('/api/v1/schedules', methods=['POST'])
def create_schedule():
    """Submit a new scheduling job from a JSON roster or uploaded CSV files."""
    job_id = str(uuid.uuid4())
    job_input_dir = None
    config = SchedulerConfig.from_env()

    try:
        if request.is_json:
            teachers, classes = DataConverter.convert_roster(request.get_json())
        else:
            teachers, classes, job_input_dir = roster_from_uploads(job_id)

        build_requirements(classes, config.periods)
    except (ValueError, KeyError, FileNotFoundError) as e:
        if job_input_dir:
            shutil.rmtree(job_input_dir, ignore_errors=True)
        abort(400, description=f"Invalid roster: {str(e)}")

    # Create job record
    job = {
        'id': job_id,
        'status': 'pending',
        'progress': 0.0,
        'log': [],
        'input_dir': job_input_dir,
        'teachers': len(teachers),
        'classes': len(classes),
        'cancel_requested': False,
        'created_at': time.time(),
        'started_at': None,
        'completed_at': None
    }

    jobs[job_id] = job

    # Start scheduling in a separate thread
    thread = Thread(target=run_schedule_job,
                    args=(job_id, teachers, classes, config, app.config['MAX_SEARCH_SECONDS']),
                    daemon=True)
    thread.start()

    return jsonify({
        'job_id': job_id,
        'status': 'pending',
        'message': 'Scheduling job submitted successfully'
    }), 202  # 202 Accepted


@app.route('/api/v1/jobs/<job_id>', methods=['DELETE'])
def delete_job(job_id):
    """Cancel a running job, or delete a finished job and its files."""
    if job_id not in jobs:
        abort(404, description=f"Job {job_id} not found")

    job = jobs[job_id]

    if job['status'] not in FINISHED_STATUSES:
        job['cancel_requested'] = True
        return jsonify({
            'message': f"Cancellation of job {job_id} requested"
        }), 202

    if job['input_dir'] and os.path.exists(job['input_dir']):
        shutil.rmtree(job['input_dir'])

    del jobs[job_id]

    return jsonify({
        'message': f"Job {job_id} deleted successfully"
    })


def create_app():
    """Create the Flask application."""
    return app


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    port = int(os.environ.get('PORT', 5000))
    app.run(host='0.0.0.0', port=port)
