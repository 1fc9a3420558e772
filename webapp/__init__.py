"""FastAPI backend that stores course programmes and runs the planners on save."""
