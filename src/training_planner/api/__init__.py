"""REST API for the Training Planner."""
