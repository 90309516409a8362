from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    """Base for response models whose JSON keys are camelCase."""
    model_config = ConfigDict(populate_by_name=True)


class ConnectionInfo(_CamelModel):
    speed: str = Field(..., description="Speed tier label")
    score: int = Field(..., ge=0, le=100, description="Tier score 0-100")
    response_time: str = Field(..., alias="responseTime", description="Handler time, e.g. '12ms'")
    emoji: str
    recommendation: str


class ClientInfo(_CamelModel):
    ip: str = Field(..., description="Normalized client address or 'unknown'")
    user_agent: str = Field(..., alias="userAgent")
    host: str
    forwarded_for: Optional[str] = Field(None, alias="forwardedFor", description="Raw X-Forwarded-For")
    remote_addr: Optional[str] = Field(None, alias="remoteAddr", description="Raw transport peer")


class IpInfoModel(BaseModel):
    ip: str
    org: Optional[str] = None
    country: Optional[str] = None


class ProxyCheckInfo(_CamelModel):
    is_proxy: bool = Field(..., alias="isProxy")
    is_vpn: bool = Field(..., alias="isVPN")
    reasons: List[str] = Field(default_factory=list, description="Reason tags in evaluation order")
    ipinfo: Optional[IpInfoModel] = None
    note: str = ""


class SpeedTestResponse(_CamelModel):
    """
    API response model for the speed-test endpoint.

    This is the external contract; clients receive this.
    """
    success: bool = True
    timestamp: str = Field(..., description="ISO-8601 UTC time of the response")
    connection: ConnectionInfo
    client: ClientInfo
    proxy_check: ProxyCheckInfo = Field(..., alias="proxyCheck")

    @classmethod
    def from_results(
        cls,
        rating: "SpeedRating",
        client: "ClientSignal",
        verdict: "DetectionVerdict",
    ) -> "SpeedTestResponse":
        """
        Assemble the response from the rating, client signal and verdict.

        Args:
            rating: Speed rating for the request
            client: Request metadata snapshot
            verdict: Proxy/VPN verdict

        Returns:
            SpeedTestResponse ready for serialization
        """
        return cls(
            timestamp=utc_timestamp(),
            connection=ConnectionInfo(
                speed=rating.level,
                score=rating.score,
                response_time=rating.response_time,
                emoji=rating.emoji,
                recommendation=rating.recommendation,
            ),
            client=ClientInfo(
                ip=client.ip,
                user_agent=client.user_agent or "unknown",
                host=client.host or "unknown",
                forwarded_for=client.forwarded_for,
                remote_addr=client.remote_addr,
            ),
            proxy_check=ProxyCheckInfo(**verdict.to_dict()),
        )


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# Import hints for type checking (avoid import cycles at runtime)
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from detection.signals import ClientSignal
    from detection.verdict import DetectionVerdict
    from rating.classifier import SpeedRating
