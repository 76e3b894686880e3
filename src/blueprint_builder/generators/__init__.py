"""Building generation from blueprints.

Pure functions that turn a validated blueprint into a Building:
- Expansion: storey groups → master/similar storeys, slabs, columns
"""

from blueprint_builder.generators.expansion import expand_blueprint, storey_name

__all__ = [
    "expand_blueprint",
    "storey_name",
]
