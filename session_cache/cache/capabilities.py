"""
Session Cache — Capabilities

Static description of what a storage adapter supports.
"""

from pydantic import BaseModel, ConfigDict, Field

# Datatype names reported in Capabilities.supported_datatypes
DATATYPES = ("null", "boolean", "integer", "float", "string", "array", "object", "resource")


class Capabilities(BaseModel):
    """
    Capability descriptor of a storage adapter.

    ``supported_datatypes`` maps each datatype name to ``True`` (stored
    natively), ``False`` (unsupported) or the name of the type the value is
    stored as.
    """

    supported_datatypes: dict[str, bool | str] = Field(default_factory=dict)
    supported_metadata: tuple[str, ...] = Field(default=())
    min_ttl: int = Field(default=0, ge=0, description="Minimum TTL in seconds (0 = no expiration support)")
    max_ttl: int = Field(default=0, ge=0, description="Maximum TTL in seconds (0 = unlimited)")
    static_ttl: bool = Field(default=True, description="TTL is fixed at write time")
    ttl_precision: float = Field(default=1.0, gt=0)
    max_key_length: int = Field(default=0, ge=0, description="Maximum key length (0 = unbounded)")
    namespace_is_prefix: bool = Field(default=True, description="Namespace is prepended to stored keys")
    namespace_separator: str = Field(default="", description="Separator between namespace and key")

    model_config = ConfigDict(frozen=True)

    def supports_datatype(self, datatype: str) -> bool:
        """Return True if values of ``datatype`` can be stored."""
        return bool(self.supported_datatypes.get(datatype, False))
