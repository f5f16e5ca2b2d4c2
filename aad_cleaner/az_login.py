"""
Azure authentication for unattended runs using a service principal secret
"""

from azure.identity import ClientSecretCredential
from azure.core.exceptions import ClientAuthenticationError

GRAPH_SCOPES = ["https://graph.microsoft.com/.default"]


def azure_login(az_tenant_id: str, az_client_id: str, az_client_secret: str):
    """
    Authenticate to Azure with a client secret.
    Returns credential for use with the Graph clients.
    """

    try:
        credential = ClientSecretCredential(
            tenant_id=az_tenant_id,
            client_id=az_client_id,
            client_secret=az_client_secret,
        )

        print("   Client secret credential created")
        return credential
    except (ClientAuthenticationError, ValueError) as e:
        print(f"   Authentication failed: {e}")
        raise
