"""Delete a Network Cloud default CNI network.

Usage: python default_cni_networks_delete.py SUBSCRIPTION_ID RESOURCE_GROUP NAME
"""

import logging
import sys

from azkit.management import ResourceManagementClient, resource_id

API_VERSION = "2023-07-01"


def main(subscription_id: str, resource_group: str, name: str) -> None:
    client = ResourceManagementClient()
    rid = resource_id(
        subscription_id, resource_group, "Microsoft.NetworkCloud", "defaultCniNetworks", name
    )
    client.delete(rid, API_VERSION)
    print(f"Deleted {rid}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main(*sys.argv[1:4])
