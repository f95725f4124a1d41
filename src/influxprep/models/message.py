"""
Input message models.

A Message is what the upstream Node-RED decoder hands us: an identifier,
the decoded payload mapping, the raw uplink bytes and the device metadata.
"""

from typing import Any, Optional

from pydantic import Field

from influxprep.models.base import DataModel


class MessageMetadata(DataModel):
    """
    Device identity and classification attributes of a message.

    Attributes:
        hardware_serial: LoRaWAN DevEUI of the node
        dev_id: Network server device id
        display_id: Human-readable display name
        display_key: Display key used by dashboards
        node_type: Node model (e.g. "Catena 4430")
        platform_type: Platform classifier
        radio_type: Radio classifier
        application_name: Network server application name
    """

    hardware_serial: Optional[Any] = Field(default=None, description="LoRaWAN DevEUI")
    dev_id: Optional[Any] = Field(default=None, description="Network server device id")
    display_id: Optional[Any] = Field(default=None, description="Display name")
    display_key: Optional[Any] = Field(default=None, description="Display key")

    node_type: Optional[Any] = Field(default=None, alias="nodeType")
    platform_type: Optional[Any] = Field(default=None, alias="platformType")
    radio_type: Optional[Any] = Field(default=None, alias="radioType")
    application_name: Optional[Any] = Field(default=None, alias="applicationName")


class Message(DataModel):
    """
    A decoded uplink message.

    Attributes:
        id: Opaque message identifier (Node-RED ``_msgid``)
        counter: Uplink sequence number
        port: LoRaWAN port the uplink arrived on
        payload: Decoded payload values keyed by name
        payload_raw: Raw uplink bytes
        metadata: Device identity and classification attributes
    """

    id: str = Field(..., alias="_msgid")
    counter: Optional[int] = Field(default=None)
    port: Optional[int] = Field(default=None)

    payload: dict[str, Any] = Field(default_factory=dict)
    payload_raw: bytes = Field(default=b"")

    metadata: MessageMetadata = Field(default_factory=MessageMetadata)

    @property
    def format_byte(self) -> Optional[int]:
        """Leading byte of the raw payload, if any."""
        if self.payload_raw:
            return self.payload_raw[0]
        return None

    @property
    def activity(self) -> list[Any]:
        """Activity samples carried in the payload (empty if absent)."""
        return list(self.payload.get("activity") or [])

    def __str__(self) -> str:
        """String representation."""
        device = self.metadata.dev_id or self.metadata.hardware_serial or "unknown device"
        return f"Message {self.id} from {device} ({len(self.payload)} payload keys)"
