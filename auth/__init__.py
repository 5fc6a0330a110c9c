"""
auth — User authentication module.

Provides:
  • Credential store (bcrypt-hashed passwords)
  • Signed, expiring identity tokens (HMAC-SHA256)
  • Register / login via the ``Authenticator``
  • ``get_current_identity`` FastAPI dependency (access guard)
"""
