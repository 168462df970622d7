"""
Boundary layer for external system integrations.

Handles all interactions with external systems (Cognito, S3, the jobs REST API).
Provides clients that translate transport failures into domain exceptions.
"""
