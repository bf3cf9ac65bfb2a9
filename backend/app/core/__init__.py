"""
Core application modules.
Contains essential infrastructure components:
- db: Database configuration and connection management
- errors: Error taxonomy and HTTP error handlers
- security: Password hashing, JWT creation/validation and the auth gate decision
"""
