"""
User accounts and profiles.

Responsibilities:
- Keep user records with bcrypt password hashes.
- Validate and store each user's interest tags.
- Maintain the upcoming and completed trip lists.
"""
