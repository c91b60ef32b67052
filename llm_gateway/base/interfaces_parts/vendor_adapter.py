"""VendorAdapter Protocol (single-class module).

Defines the contract every per-vendor translator implements. The pure
translation half (``build_*``/``parse_*``) never touches the network; the
``send_*`` half is normally inherited from
:class:`llm_gateway.base.adapter.BaseVendorAdapter`, which runs the shared
transport helpers around the translation methods.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple, runtime_checkable

from ..cancellation import CancellationToken
from ..models import Model, NeutralOutput, SendData
from ..streaming import ReplySink, StreamSignal


@runtime_checkable
class VendorAdapter(Protocol):
    """Translator between the neutral data model and one vendor wire format."""

    @property
    def provider_name(self) -> str:
        """Configured client name; the provider part of model ids."""
        ...

    def list_models(self) -> List[Model]:
        """Declared (or built-in) catalogue in declaration order."""
        ...

    def endpoint(self, request: SendData, model: Model) -> str:
        ...

    def build_headers(self, request: SendData, model: Model) -> Dict[str, str]:
        """Vendor auth and feature headers; raises ``MissingCredential`` when required auth is absent."""
        ...

    def build_body(self, request: SendData, model: Model) -> Dict[str, Any]:
        """Wire body; raises ``MalformedInput`` for content the vendor cannot represent."""
        ...

    def parse_unary(self, data: Mapping[str, Any], model: Model) -> NeutralOutput:
        ...

    def parse_stream_frame(self, frame: Any, model: Model) -> List[StreamSignal]:
        """Classify one decoded stream frame; unknown frames become ``Ignore``."""
        ...

    def parse_error_envelope(self, data: Any) -> Optional[Tuple[Optional[str], str]]:
        """Return ``(vendor_code, message)`` when ``data`` is an error envelope."""
        ...

    def send_once(
        self,
        model: Model,
        request: SendData,
        token: Optional[CancellationToken] = None,
    ) -> NeutralOutput:
        ...

    def send_streaming(
        self,
        model: Model,
        request: SendData,
        sink: ReplySink,
        token: Optional[CancellationToken] = None,
    ) -> None:
        ...


__all__ = ["VendorAdapter"]
