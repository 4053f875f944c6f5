"""Create a fleet update run and poll it by hand.

Shows the begin / poll with Retry-After / final result loop that
``LROPoller.result()`` otherwise runs for you.

Usage: python fleet_update_run_poll.py SUBSCRIPTION_ID RESOURCE_GROUP FLEET RUN_NAME
"""

import logging
import sys
import time

from azkit.management import ResourceManagementClient, resource_id
from azkit.models.fleet import (
    ManagedClusterUpdate,
    ManagedClusterUpgradeSpec,
    ManagedClusterUpgradeType,
    UpdateGroup,
    UpdateRun,
    UpdateRunStrategy,
    UpdateStage,
)

API_VERSION = "2023-10-15"


def main(subscription_id: str, resource_group: str, fleet: str, run_name: str) -> None:
    client = ResourceManagementClient()
    rid = resource_id(
        subscription_id,
        resource_group,
        "Microsoft.ContainerService",
        "fleets",
        fleet,
        "updateRuns",
        run_name,
    )
    run = UpdateRun(
        strategy=UpdateRunStrategy(
            stages=[UpdateStage(name="canary", groups=[UpdateGroup(name="canary")])]
        ),
        managed_cluster_update=ManagedClusterUpdate(
            upgrade=ManagedClusterUpgradeSpec(
                type=ManagedClusterUpgradeType.FULL, kubernetes_version="1.27.3"
            )
        ),
    )

    poller = client.begin_create_or_update(rid, run, API_VERSION, model=UpdateRun)
    while not poller.done():
        time.sleep(poller.retry_after)
        poller.poll()
        print(f"status: {poller.status()}")

    created = poller.result()
    print(f"{created.name}: {created.provisioning_state}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main(*sys.argv[1:5])
