"""Training Planner: workout onboarding, planning and goal tracking."""

__version__ = "0.1.0"
