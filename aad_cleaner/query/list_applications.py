"""
Azure App Registration listing using Microsoft Graph SDK
"""

from kiota_abstractions.base_request_configuration import RequestConfiguration
from msgraph.generated.applications.applications_request_builder import ApplicationsRequestBuilder

from aad_cleaner.models import ApplicationRecord
from aad_cleaner.query.pagination import Page, PageIterator

APPLICATION_FIELDS = ["id", "appId", "displayName", "createdDateTime", "tags"]


def build_request_configuration(app_filter: str) -> RequestConfiguration:
    """
    $count and the ConsistencyLevel header enable the advanced query
    capabilities the filter relies on
    """
    query_params = ApplicationsRequestBuilder.ApplicationsRequestBuilderGetQueryParameters(
        select=APPLICATION_FIELDS,
        filter=app_filter,
        orderby=["displayName"],
        count=True,
    )
    request_configuration = RequestConfiguration(query_parameters=query_params)
    request_configuration.headers.add("ConsistencyLevel", "eventual")
    return request_configuration


async def list_applications_async(graph_client, app_filter: str) -> list:
    """
    List every app registration matching app_filter, following all result pages.
    Returns ApplicationRecord values ordered by display name.
    """

    try:
        print(f"   Querying Microsoft Graph for applications matching: {app_filter}")
        first_page = await graph_client.applications.get(
            request_configuration=build_request_configuration(app_filter)
        )

        async def fetch_page(next_link: str) -> Page:
            print(f"   Fetching next page of applications...")
            return Page.from_collection(await graph_client.applications.with_url(next_link).get())

        applications = []

        def collect(app) -> bool:
            applications.append(ApplicationRecord.from_graph(app))
            return True

        await PageIterator(Page.from_collection(first_page), fetch_page).iterate(collect)

        print(f"   Found {len(applications)} matching applications")
        return applications

    except Exception as e:
        print(f"   Failed to list applications: {str(e)}")
        print(f"   Error type: {type(e).__name__}")
        raise
