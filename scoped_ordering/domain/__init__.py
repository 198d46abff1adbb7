"""
Domain layer.

The domain layer holds the ordering rules' vocabulary: scope declarations,
change signals and the error hierarchy. It has no dependencies on external
frameworks or infrastructure.
"""
