"""Wire models for the covered Azure REST APIs."""

from azkit.models._base import ExpandableEnum, RestModel, wire_field  # noqa: F401
from azkit.models.appservice import NotificationLevel, Snapshot, SnapshotCollection  # noqa: F401
from azkit.models.arm import (  # noqa: F401
    ErrorDetail,
    ErrorResponse,
    Operation,
    OperationDisplay,
    ProxyResource,
    Resource,
    ResourceProviderOperationDisplay,
    SystemData,
    TrackedResource,
)
from azkit.models.authorization import MicrosoftGraphOperationStatus  # noqa: F401
from azkit.models.blob import (  # noqa: F401
    AccessTier,
    BlobHttpHeaders,
    BlobRequestConditions,
    Block,
    BlockBlobItem,
    BlockList,
    BlockListType,
    WriteMode,
)
from azkit.models.documents import (  # noqa: F401
    AnalyzeResult,
    AnalyzeResultOperation,
    BoundingRegion,
    DocumentSpan,
    DocumentTable,
    DocumentTableCell,
)
from azkit.models.fleet import (  # noqa: F401
    ManagedClusterUpdate,
    ManagedClusterUpgradeSpec,
    UpdateGroup,
    UpdateRun,
    UpdateRunStrategy,
    UpdateStage,
)
from azkit.models.frontdoor import (  # noqa: F401
    AnyRouteConfiguration,
    ForwardingConfiguration,
    FrontDoor,
    RedirectConfiguration,
    RouteConfiguration,
    RoutingRule,
    SubResource,
)
from azkit.models.hybridnetwork import OperationalState, RoleInstanceProperties  # noqa: F401
from azkit.models.metricsadvisor import AzureTableParameterPatch  # noqa: F401
from azkit.models.synapse import AmazonS3Dataset  # noqa: F401
