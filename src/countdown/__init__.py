"""countdown: an hours/minutes/seconds countdown timer for the desktop."""

__version__ = "0.1.0"
