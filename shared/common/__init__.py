# Shared common library for the starter services.
# Holds the pieces every service wires in the same way: model mixins,
# JWT token handling, middleware, the DRF exception handler and health checks.

__version__ = "1.0.0"
