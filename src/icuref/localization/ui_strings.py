"""Shared base-language message templates.

Every declared message table is merged with these templates, so any
source file can register them. Instances of shared templates are keyed
under this file's path (I18nConfig.shared_strings_source), not under the
registering file.

Templates use a non-breaking space between a value and its unit.
"""

from collections.abc import Mapping
from types import MappingProxyType

__all__ = ["UI_STRINGS"]

UI_STRINGS: Mapping[str, str] = MappingProxyType({
    # Durations and savings (e.g. "63 ms", "5.2 s", "148 KB")
    "ms": "{timeInMs, number, milliseconds}\xa0ms",
    "seconds": "{timeInMs, number, seconds}\xa0s",
    "displayValueByteSavings": "Potential savings of {wastedBytes, number, bytes}\xa0KB",
    "displayValueMsSavings": "Potential savings of {wastedMs, number, milliseconds}\xa0ms",
    # Table column labels
    "columnURL": "URL",
    "columnSize": "Size",
    "columnCacheTTL": "Cache TTL",
    "columnWastedBytes": "Potential Savings",
    "columnWastedMs": "Potential Savings",
    "columnTimeSpent": "Time Spent",
    "columnLocation": "Location",
    "columnResourceType": "Resource Type",
    "columnRequests": "Requests",
    "columnTransferSize": "Transfer Size",
    "columnName": "Name",
    # Table row labels by resource type
    "totalResourceType": "Total",
    "documentResourceType": "Document",
    "scriptResourceType": "Script",
    "stylesheetResourceType": "Stylesheet",
    "imageResourceType": "Image",
    "mediaResourceType": "Media",
    "fontResourceType": "Font",
    "otherResourceType": "Other",
    "thirdPartyResourceType": "Third-party",
})
