"""
Shared, cross-cutting code for the gateway.

`core/` holds small building blocks that multiple features use (settings,
logging, the pooled upstream HTTP client, the listing/user service clients,
error rendering). Keep feature-specific orchestration in the corresponding
feature package (e.g. `listings/`).
"""
