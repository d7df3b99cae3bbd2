"""Core data model and naming rules for generated skills."""
