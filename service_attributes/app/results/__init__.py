"""
Authentication result package.

- models: AuthResult and the request/response models of the provider API.
- sealing: sign-and-encrypt capability (JWS nested in a JWE) and its inverse.
- assembler: builds an AuthResult from requested attributes and seals it.
"""
