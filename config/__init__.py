"""Configuration package for the EP verb console.

Settings come from four layers, later ones winning: built-in defaults,
``settings.json``/``voices.json`` in the config directory, environment
variables, then command-line flags. Unknown flags are handed back to the
console front end.

Main components:
- config.py: Validated dataset/speech dataclasses and the layered loader
- service.py: Flat read-only facade used by the application
- voices.json: Ordered list of preferred pt-PT voice names
"""
