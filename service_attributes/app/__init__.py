"""
Attribute provider service package.

Mock out-of-band attribute provider for identity-verification flows. A
relying party starts an authentication and receives a browser URL; when the
browser visits it, the provider seals an authentication result and delivers
it inline on the redirect or pushes it to a callback URL.

- app.main: FastAPI routes and the service wiring.
- app.codec: URL-safe encoding of parameters carried in browser URLs.
- app.attributes: attribute policy (verification and value mapping).
- app.results: result models, sealing, and assembly.
- app.delivery: inline and out-of-band delivery.
- app.session: session activity sink.

Design notes:
- No server-side session storage. Everything a later request needs is
  encoded into the URL handed to the browser.
- Configuration is loaded once at startup and never mutated, so handlers
  share no mutable state.
"""
