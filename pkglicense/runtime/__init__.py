"""Runtime orchestration for license checks."""
