"""
Attribute policy package.

The policy decides which attributes the provider can serve and what value
each one resolves to. It is configured once at startup and read-only after.
"""
