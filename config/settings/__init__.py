"""Settings package for the GoWheels project.

`base.py` contains common configuration shared across environments. The
`dev.py` and `prod.py` modules extend base settings with environment
specific overrides.
"""
