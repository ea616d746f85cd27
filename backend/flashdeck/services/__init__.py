"""Services package for the study engine: scheduling, sessions, storage and analytics."""
