"""
Sign-in audit log lookup using Microsoft Graph beta SDK
"""

from kiota_abstractions.base_request_configuration import RequestConfiguration
from msgraph_beta.generated.audit_logs.sign_ins.sign_ins_request_builder import SignInsRequestBuilder

from aad_cleaner.models import SignInRecord
from aad_cleaner.query.pagination import Page, PageIterator

SIGN_IN_EVENT_TYPES = ("interactiveUser", "nonInteractiveUser", "servicePrincipal", "managedIdentity")


def build_sign_in_filter(app_id: str) -> str:
    event_types = " or ".join(f"t eq '{event_type}'" for event_type in SIGN_IN_EVENT_TYPES)
    escaped_app_id = app_id.replace("'", "''")
    return f"signInEventTypes/any(t: {event_types}) and appId eq '{escaped_app_id}'"


async def get_sign_ins_async(sign_in_client, app_id: str) -> list:
    """
    Look up the most recent sign-in of any tracked event type for an application.

    Args:
        sign_in_client: Microsoft Graph beta client instance (signInEventTypes is beta only)
        app_id: Client (application) ID of the app registration

    Returns:
        A list holding zero or one SignInRecord
    """

    try:
        query_params = SignInsRequestBuilder.SignInsRequestBuilderGetQueryParameters(
            filter=build_sign_in_filter(app_id),
            orderby=["createdDateTime desc"],
            top=1,
        )
        request_configuration = RequestConfiguration(query_parameters=query_params)
        result = await sign_in_client.audit_logs.sign_ins.get(request_configuration=request_configuration)

        async def fetch_page(next_link: str) -> Page:
            return Page.from_collection(await sign_in_client.audit_logs.sign_ins.with_url(next_link).get())

        sign_ins = []

        # Only the newest sign-in matters; stop before any further page is requested
        def collect_first(sign_in) -> bool:
            sign_ins.append(SignInRecord.from_graph(sign_in))
            return False

        await PageIterator(Page.from_collection(result), fetch_page).iterate(collect_first)
        return sign_ins

    except Exception as e:
        print(f"   Failed to get sign-ins of application {app_id}: {str(e)}")
        print(f"   Error type: {type(e).__name__}")
        raise
