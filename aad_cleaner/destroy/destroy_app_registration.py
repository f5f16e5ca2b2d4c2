"""
Azure App Registration removal using Microsoft Graph SDK
"""

from aad_cleaner.models import ApplicationRecord


async def remove_app_registration_async(graph_client, app: ApplicationRecord) -> bool:
    """
    Remove a stale app registration by its directory object ID.
    Returns False instead of raising so the remaining apps still get processed.
    """

    try:
        print(f"   Deleting app registration '{app.display_name}' (Object ID: {app.id})...")
        await graph_client.applications.by_application_id(app.id).delete()

        print(f"   App registration removed successfully")
        print(f"   Removed Object ID: {app.id}")
        print(f"   App ID: {app.app_id}")
        return True

    except Exception as e:
        print(f"   Was not able to delete application {app.display_name} with id={app.id}: {str(e)}")
        print(f"   Error type: {type(e).__name__}")
        return False
