"""Blueprint Builder: storey-group blueprints expanded into validated building models."""

__version__ = "0.1.0"
