"""awardcheck -- award-eligibility calculator for robotics competition events."""

__version__ = "0.3.0"
