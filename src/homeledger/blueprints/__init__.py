"""API blueprints, one package per resource."""
