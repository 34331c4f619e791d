"""
Storefront gateway service package.

The gateway fronts the browser client, translating its requests into
calls against the upstream product/order service:
- Authentication: single-shot passkey comparison
- Catalog: product listing relayed from the upstream
- Orders: order placement forwarded with status pass-through

Structure:
- app.main: FastAPI app, routes, and middleware wiring.
- app.adapters: HTTP client for the upstream service.
- app.domain: Wire models, translators, and the CORS/method front door.
"""
