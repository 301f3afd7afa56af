"""
auth — User authentication module.

Provides:
  • Session token creation & verification (HS256 JWT)
  • Password hashing (bcrypt)
  • Register / Login / Profile API routes
  • ``get_current_user_id`` FastAPI dependency
"""
