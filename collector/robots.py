"""
Parses robots.txt text into structured rules and answers allow/disallow
questions for a URL.
"""
from __future__ import annotations

from urllib.parse import urlparse

from models import RobotsData


def parse_robots_text(raw_text: str) -> RobotsData:
    """Parse robots.txt raw text into structured rules."""
    data = RobotsData(raw_text=raw_text)
    current_agents: list[str] = []
    collecting_agents = False

    for raw_line in raw_text.splitlines():
        line = raw_line.split("#", 1)[0].strip()
        if not line:
            continue

        if ":" not in line:
            data.parse_errors.append(f"Invalid line (no colon): {line!r}")
            continue

        directive, _, value = line.partition(":")
        directive = directive.strip().lower()
        value = value.strip()

        if directive == "user-agent":
            # A User-agent line after rules starts a new group
            if not collecting_agents:
                current_agents = []
                collecting_agents = True
            current_agents.append(value)
            continue

        collecting_agents = False

        if directive == "disallow":
            for agent in current_agents:
                data.disallow_rules.append({"agent": agent, "path": value})

        elif directive == "allow":
            for agent in current_agents:
                data.allow_rules.append({"agent": agent, "path": value})

        elif directive == "crawl-delay":
            try:
                data.crawl_delay = float(value)
            except ValueError:
                data.parse_errors.append(f"Invalid crawl-delay value: {value!r}")

        elif directive == "sitemap":
            if value:
                data.sitemap_urls.append(value)

        # Unknown directives (Host:, Noindex:, ...) are ignored

    return data


def is_url_allowed(url: str, robots_data: RobotsData, user_agent: str = "*") -> bool:
    """
    Check whether a URL is allowed for the given user-agent.
    Returns True (allowed) if no matching Disallow rule exists.
    Uses longest-path specificity matching.
    """
    path = urlparse(url).path or "/"
    agents_to_check = [user_agent.lower(), "*"]

    allows = [
        r["path"] for r in robots_data.allow_rules
        if r["agent"].lower() in agents_to_check
    ]
    disallows = [
        r["path"] for r in robots_data.disallow_rules
        if r["agent"].lower() in agents_to_check
    ]

    best_allow_len = max((len(p) for p in allows if path.startswith(p)), default=-1)
    # Empty Disallow: means "nothing is disallowed"
    best_disallow_len = max((len(p) for p in disallows if p and path.startswith(p)), default=-1)

    if best_disallow_len < 0:
        return True

    # Allow wins on equal or greater specificity
    return best_allow_len >= best_disallow_len
