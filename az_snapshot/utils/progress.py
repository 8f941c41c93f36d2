"""
Azure Snapshot - Progress Tracking

Provides visual progress feedback for the restore steps.
"""

import sys

from tqdm import tqdm


class ProgressTracker:
    """
    Track progress of workflow steps with a tqdm bar.

    Example:
        tracker = ProgressTracker(total_steps=6, desc="Restore vm1")
        tracker.start()

        tracker.update_step("Stopping VM")
        # ... do work ...
        tracker.advance()

        tracker.finish()
    """

    def __init__(self, total_steps: int, desc: str = "Operation"):
        """
        Initialize progress tracker.

        Args:
            total_steps: Total number of steps in operation
            desc: Description of the operation
        """
        self.total_steps = total_steps
        self.current_step = 0
        self.desc = desc
        self.bar = None

    def start(self):
        """Start the progress tracker."""
        self.current_step = 0
        self.bar = tqdm(
            total=self.total_steps,
            desc=self.desc,
            bar_format='{desc}: {percentage:3.0f}%|{bar}| {n_fmt}/{total_fmt} [{elapsed}]',
            ncols=80,
            file=sys.stdout
        )

    def update_step(self, step_name: str):
        """
        Update the current step name.

        Args:
            step_name: Name of the current step
        """
        if self.bar:
            self.bar.set_description(f"{self.desc} - {step_name}")

    def advance(self, steps: int = 1):
        """Advance the progress by one or more steps."""
        self.current_step += steps
        if self.bar:
            self.bar.update(steps)

    def finish(self):
        """Finish the progress tracker."""
        if self.bar:
            self.bar.close()
            self.bar = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.finish()
        return False


class SimpleProgressTracker:
    """
    Progress tracker without any output.

    Used when progress display is disabled (e.g., output is not a terminal).
    """

    def __init__(self, total_steps: int = 0, desc: str = "Operation"):
        self.total_steps = total_steps
        self.current_step = 0

    def start(self):
        pass

    def update_step(self, step_name: str):
        pass

    def advance(self, steps: int = 1):
        self.current_step += steps

    def finish(self):
        pass

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.finish()
        return False


def create_progress_tracker(total_steps: int, desc: str = "Operation", enabled: bool = True):
    """
    Factory function to create appropriate progress tracker.

    Args:
        total_steps: Total number of steps
        desc: Description of operation
        enabled: Whether to show progress at all

    Returns:
        ProgressTracker or SimpleProgressTracker instance
    """
    if not enabled:
        return SimpleProgressTracker(total_steps, desc)
    return ProgressTracker(total_steps, desc)
