"""Data Models for the decoded bulletins."""
