#!/usr/bin/env python3
"""
Azure App Registration Cleanup Script

Finds stale app registrations and removes them:
- Lists app registrations matching the configured filter
- Looks up the most recent sign-in of each application
- Honors 'expireOn : YYYY-MM-DD' tags as an opt-out
- Deletes registrations older than the retention period with no sign-ins

Runs in report-only mode unless REPORT_ONLY is explicitly set to false.
CAUTION: With REPORT_ONLY=false this permanently deletes app registrations.
"""

import sys, argparse, asyncio, dataclasses
import traceback
from msgraph import GraphServiceClient
from msgraph_beta import GraphServiceClient as BetaGraphServiceClient
from aad_cleaner import az_login, cleaner, settings


def print_status(message, level="info"):
    """Simple console output with different levels"""
    if level == "header":
        print(f"\n{message}")
        print("=" * len(message))
    elif level == "section":
        print(f"\n{message}")
    else:
        print(message)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Delete stale Azure AD app registrations.")
    parser.add_argument("--config", help=f"Path to a YAML config file (default: {settings.DEFAULT_CONFIG_FILE} if present)")
    parser.add_argument("--report-only", action="store_true", help="Only print verdicts, never delete")
    return parser.parse_args(argv)


async def async_main(argv=None):
    """Main async cleanup function"""

    args = parse_args(argv)

    print_status("Azure App Registration Cleanup Process", "header")

    try:
        print_status("Loading configuration...", "section")
        config = settings.CleanerConfig.from_mapping(settings.load_config(args.config))
        if args.report_only and not config.report_only:
            config = dataclasses.replace(config, report_only=True)
        print_status("Configuration loaded successfully")
        for key, value in config.describe().items():
            print_status(f"{key}: {value}")

        if not config.report_only:
            print_status("WARNING: Stale app registrations will be deleted!", "section")

        print_status("Azure Authentication", "section")
        credential = az_login.azure_login(config.tenant_id, config.client_id, config.client_secret)

        print_status("Initializing Microsoft Graph Clients", "section")
        graph_client = GraphServiceClient(credentials=credential, scopes=az_login.GRAPH_SCOPES)
        sign_in_client = BetaGraphServiceClient(credentials=credential, scopes=az_login.GRAPH_SCOPES)
        print_status("Graph clients initialized successfully")

        print_status("App Registration Evaluation", "section")
        summary = await cleaner.clean_applications_async(graph_client, sign_in_client, config)

        print_status("CLEANUP PROCESS COMPLETED", "header")
        print_status(f"Applications evaluated: {summary.evaluated}")
        print_status(f"Applications skipped: {summary.skipped}")
        print_status(f"Applications marked for deletion: {summary.marked_for_deletion}")
        if summary.report_only:
            print_status("Report-only mode: no app registrations were deleted")
        else:
            print_status(f"Applications deleted: {summary.deleted}")
            if summary.failed_deletes:
                print_status(f"Failed deletions: {', '.join(summary.failed_deletes)}")

        return summary

    except Exception as e:
        print_status(f"ERROR: Cleanup process failed!", "section")
        print_status(f"   Error details: {str(e)}")
        print_status(f"   Error type: {type(e).__name__}")

        print_status(f"Full traceback:", "section")

        tb_str = traceback.format_exc()
        for line in tb_str.split('\n'):
            if line.strip():
                print_status(line)

        sys.exit(1)


def main():
    """Synchronous main function that runs the async cleanup"""
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
