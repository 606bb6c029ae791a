"""Authentication, request logging and error handling middleware."""
