import pandas as pd
from pathlib import Path
import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

TEACHERS_FILE = 'Teachers.csv'
CLASSES_FILE = 'Classes.csv'
CLASS_SUBJECTS_FILE = 'Class_Subjects.csv'


class ScheduleDataLoader:
    """
    Handles loading and validating roster data from CSV files.
    Provides validation and relationship checking between the roster files.
    """

    def __init__(self, input_dir: Optional[str] = None):
        """
        Initialize the data loader.

        Args:
            input_dir: Directory containing input CSV files
        """
        self.input_dir = Path(input_dir) if input_dir else Path.cwd()

        # Initialize data dictionary
        self.data = {}

        if not self.input_dir.exists():
            logger.error(f"Input directory not found at {self.input_dir}")
            raise FileNotFoundError(f"Input directory not found at {self.input_dir}")

        logger.info("Data loader initialized successfully")

    def load_rosters(self):
        """
        Load the roster files required for scheduling:
        - Teachers
        - Classes
        - Class subjects (required periods per week)
        """
        try:
            logger.info("Loading roster files...")

            self.data['teachers'] = pd.read_csv(self.input_dir / TEACHERS_FILE, dtype=str)
            logger.info(f"Teachers loaded: {len(self.data['teachers'])} records")

            self.data['classes'] = pd.read_csv(self.input_dir / CLASSES_FILE, dtype=str)
            logger.info(f"Classes loaded: {len(self.data['classes'])} records")

            # A school with no subjects yet may ship an empty file
            try:
                self.data['class_subjects'] = pd.read_csv(self.input_dir / CLASS_SUBJECTS_FILE, dtype=str)
                logger.info(f"Class subjects loaded: {len(self.data['class_subjects'])} records")
            except pd.errors.EmptyDataError:
                self.data['class_subjects'] = pd.DataFrame(
                    columns=['Class ID', 'Subject', 'Hours Per Week', 'Preferred Days']
                )
                logger.warning("Class subjects file is empty, using empty dataset")

        except FileNotFoundError as e:
            logger.error(f"Missing input file: {e.filename}")
            raise

    def validate_relationships(self) -> List[str]:
        """
        Validate relationships and data consistency across loaded datasets.
        Checks for:
        - Class subjects reference classes that exist
        - Teacher and class IDs are unique
        """
        logger.info("Validating data relationships...")
        validation_issues = []

        teachers = self.data['teachers']
        classes = self.data['classes']
        class_subjects = self.data['class_subjects']

        known_classes = set(classes['Class ID'])
        unknown_classes = set(class_subjects['Class ID']) - known_classes
        if unknown_classes:
            issue = f"Unknown classes in class subjects: {sorted(unknown_classes)}"
            validation_issues.append(issue)
            logger.warning(issue)

        for name, df, column in (('teacher', teachers, 'Teacher ID'), ('class', classes, 'Class ID')):
            duplicates = df[column][df[column].duplicated()].unique()
            if len(duplicates):
                issue = f"Duplicate {name} IDs: {sorted(duplicates)}"
                validation_issues.append(issue)
                logger.warning(issue)

        if not validation_issues:
            logger.info("All relationships are valid")
        else:
            logger.warning(f"Found {len(validation_issues)} validation issues")

        return validation_issues

    def load_all(self) -> Dict[str, pd.DataFrame]:
        """
        Load and validate all roster data.

        Returns:
            Dict: Dictionary containing all loaded dataframes
        """
        try:
            logger.info("Starting data load process...")
            self.load_rosters()
            issues = self.validate_relationships()

            if issues:
                logger.warning(f"Data loaded with {len(issues)} validation issues")
            else:
                logger.info("Data loaded and validated successfully")

            return self.data

        except Exception as e:
            logger.error(f"Error during data loading: {str(e)}")
            raise
