"""Public models for the Buzzy SDK."""

from buzzy_sdk.models.credential import Credential, RequestDescriptor

__all__ = ["Credential", "RequestDescriptor"]
