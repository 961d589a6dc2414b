"""
Field project credential service.

Coordinators bind their phone number to a project using the server secret,
log in for a session token, and delegate member tokens for that project.
"""

__version__ = "1.0.0"
