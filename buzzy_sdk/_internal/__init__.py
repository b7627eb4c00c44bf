"""Internal modules for Buzzy SDK.

WARNING: These modules are not a stable API. Import from ``buzzy_sdk``.

Modules:
    auth - Authenticated request construction
    throttle - Shared admission queue and pacing
    envelope - Response envelope decoding and failure policy
    operations - Registry of remote operations
    http - Shared HTTP client configuration
"""
