#!/usr/bin/env python3
"""
ghanalyzer - Repository Analysis Example

This example walks through a full analysis of one repository:
1. Parse the repository URL
2. Fetch metadata, contributors and languages
3. Summarize issues and commit activity
4. Fetch composite statistics concurrently
5. Export the results

Run with: python examples/analyze_repo.py [https://github.com/owner/repo]
Set GITHUB_TOKEN to use the authenticated quota.
"""

import asyncio
import logging
import sys

from ghanalyzer import (
    AsyncGitHubAnalyzerClient,
    GitHubAnalyzerClient,
    GitHubAnalyzerError,
    configure_logging,
    format_error_message,
    parse_repository_url,
)
from ghanalyzer.analytics import (
    compute_issue_stats,
    format_bytes,
    is_activity_pending,
    language_breakdown,
    weekly_totals,
)
from ghanalyzer.export import (
    export_to_file,
    prepare_contributors_for_export,
    prepare_repo_data_for_export,
)


def main() -> None:
    """Run the analysis example."""
    print("=== ghanalyzer Example ===\n")

    configure_logging(level=logging.WARNING)
    url = sys.argv[1] if len(sys.argv) > 1 else "https://github.com/octocat/Hello-World"

    # Step 1: Parse the URL
    print("1. Parsing repository URL...")
    try:
        ref = parse_repository_url(url)
    except GitHubAnalyzerError as e:
        print(f"   {format_error_message(e)}")
        sys.exit(1)
    print(f"   Repository: {ref.full_name}")

    client = GitHubAnalyzerClient.from_env()
    info = client.get_rate_limit_info()
    print(f"   Mode: {info.label} ({info.limit} requests/hour)")

    try:
        # Step 2: Metadata, contributors, languages
        print("\n2. Fetching repository data...")
        repo = client.repos.get_repository(ref.owner, ref.repo)
        client.history.add(url, ref.owner, ref.repo)
        print(f"   {repo['full_name']}: {repo.get('description') or 'no description'}")
        print(f"   Stars: {repo['stargazers_count']}  Forks: {repo['forks_count']}")

        contributors = client.repos.get_contributors(ref.owner, ref.repo, per_page=10)
        print(f"   Top contributors: {', '.join(c['login'] for c in contributors[:5])}")

        languages = client.repos.get_languages(ref.owner, ref.repo)
        for share in language_breakdown(languages)[:5]:
            print(f"   - {share.name}: {share.percentage}% ({format_bytes(share.bytes)})")

        # Step 3: Issues and activity
        print("\n3. Summarizing issues and activity...")
        stats = compute_issue_stats(client.repos.get_issues(ref.owner, ref.repo))
        print(f"   Issues: {stats.total} ({stats.open} open, {stats.closed} closed)")
        print(f"   Average resolution: {stats.avg_resolution_days} days")

        activity = client.repos.get_weekly_commit_activity(ref.owner, ref.repo)
        if is_activity_pending(activity):
            print("   Commit statistics are still being computed, try again shortly")
        else:
            busiest_week, commits = max(weekly_totals(activity), key=lambda item: item[1])
            print(f"   Busiest week: {busiest_week:%Y-%m-%d} ({commits} commits)")

        # Step 4: Concurrent statistics
        print("\n4. Fetching statistics concurrently...")
        composite = asyncio.run(fetch_statistics(ref.owner, ref.repo))
        if composite.pull_request_counts is not None:
            counts = composite.pull_request_counts
            print(f"   Pull requests: {counts.open} open, {counts.closed} closed")
        for part, error in composite.errors.items():
            print(f"   {part} unavailable: {format_error_message(error)}")

        # Step 5: Export
        print("\n5. Exporting...")
        path = export_to_file(
            prepare_repo_data_for_export(
                repo,
                languages=languages,
                contributors=prepare_contributors_for_export(contributors),
            ),
            filename=ref.repo,
        )
        print(f"   Wrote {path}")

        snapshot = client.rate_limit
        if snapshot is not None:
            print(f"\nRate limit: {snapshot.remaining}/{snapshot.limit} remaining")

    except GitHubAnalyzerError as e:
        print(f"\nError: {format_error_message(e)}")
        print(f"Details: {e.message}")
        sys.exit(1)
    finally:
        client.close()


async def fetch_statistics(owner: str, repo: str):
    async with AsyncGitHubAnalyzerClient.from_env() as client:
        return await client.repository_statistics(owner, repo, best_effort=True)


if __name__ == "__main__":
    main()
