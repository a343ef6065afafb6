"""
auth — User authentication module.

Provides:
  • JWT (HS256) token issuance & verification
  • Password hashing (bcrypt, work factor 10 by default)
  • ``AuthService`` for register / login
  • Register / Login / current-user API routes
  • ``get_current_user_id`` FastAPI dependency
"""
