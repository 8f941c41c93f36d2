"""Utils package."""

from .logger import setup_logging, get_logger
from .progress import ProgressTracker, SimpleProgressTracker, create_progress_tracker
from .prompt import Prompter

__all__ = [
    'setup_logging',
    'get_logger',
    'ProgressTracker',
    'SimpleProgressTracker',
    'create_progress_tracker',
    'Prompter',
]
