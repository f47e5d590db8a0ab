"""
Root zone extractor.

The DNS root zone (http://www.internic.net/domain/root.zone) is the most
accurate list of what is currently delegated, but carries no categorical
information. Every resource record line starts with its owner name; owner
names that are a single label directly under the root identify a TLD.
"""

from typing import Optional

from .enums import LogLevel
from .fetcher import Fetcher
from .labels import decode_label, unique_in_order
from .run_logger import RunLogger

COMPONENT = "RootZone"


def owner_name(line: str) -> str:
    """Return the text of a zone file line up to the first whitespace."""
    parts = line.split(None, 1)
    return parts[0] if parts else ""


def is_tld_owner(name: str) -> bool:
    """True if the only dot in an owner name is the trailing one."""
    return name.find(".") == len(name) - 1


def parse_root_zone(text: str) -> list[str]:
    """
    Extract the delegated TLD labels from a root zone transfer.

    Args:
        text: Zone file contents, one resource record per line

    Returns:
        Unique TLD labels in first-seen order, punycode labels decoded to Unicode
    """
    labels = []
    for line in text.splitlines():
        name = owner_name(line)
        if not name or not is_tld_owner(name):
            continue
        label = name[:-1]
        # The root itself ("." owner) leaves an empty label
        if not label:
            continue
        labels.append(decode_label(label))
    return unique_in_order(labels)


async def fetch_root_zone(
    fetcher: Fetcher,
    url: str,
    logger: Optional[RunLogger] = None,
) -> list[str]:
    """Fetch and parse the root zone."""
    response = await fetcher.fetch(url)
    tlds = parse_root_zone(response.text)
    if logger:
        logger.log(LogLevel.INFO, COMPONENT, f"Found TLDs: {len(tlds)}", {"url": url})
    return tlds
