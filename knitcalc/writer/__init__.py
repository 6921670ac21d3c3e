"""writer: English rendering of schedules, warnings, and instructions."""
