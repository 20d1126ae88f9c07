"""Quickstart example for icuref.

Declares the templates of a source file, builds a document that carries
reference tokens instead of text, and localizes the same tokens into
several locales.

Note: the audit module lives in a temporary directory here. A real project
passes __file__ to declare() and uses its own project root.
"""

import copy
import json
import tempfile
from pathlib import Path

from icuref import I18nConfig, InstanceRegistry, LocaleCatalogs, PathCatalogLoader
from icuref.localization import UI_STRINGS

UIStrings = {
    "title": "Uses efficient caching",
    "description": "Found {itemCount, plural, =1 {1 resource} other {# resources}}",
}

CATALOGS = {
    "en": {
        "audits/cache.py | title": {"message": "Uses efficient caching"},
        "audits/cache.py | description": {
            "message": "Found {itemCount, plural, =1 {1 resource} other {# resources}}",
        },
        "lib/i18n.py | ms": {"message": "{timeInMs, number, milliseconds}\xa0ms"},
        "lib/i18n.py | displayValueByteSavings": {
            "message": "Potential savings of {wastedBytes, number, bytes}\xa0KB",
        },
    },
    "de": {
        "audits/cache.py | title": {"message": "Nutzt effizientes Caching"},
        "audits/cache.py | description": {
            "message": "{itemCount, plural, =1 {1 Ressource} other {# Ressourcen}} gefunden",
        },
        "lib/i18n.py | ms": {"message": "{timeInMs, number, milliseconds}\xa0ms"},
        "lib/i18n.py | displayValueByteSavings": {
            "message": "Mögliche Einsparung von {wastedBytes, number, bytes}\xa0KB",
        },
    },
}

with tempfile.TemporaryDirectory() as tmp:
    root = Path(tmp)
    for locale, catalog in CATALOGS.items():
        (root / f"{locale}.json").write_text(json.dumps(catalog), encoding="utf-8")

    # Example 1: Load catalogs and negotiate a locale
    print("=" * 50)
    print("Example 1: Catalogs")
    print("=" * 50)

    loader = PathCatalogLoader(f"{tmp}/{{locale}}.json")
    catalogs = LocaleCatalogs.from_loader(loader, ["de"])
    print(catalogs.supported_locales)
    # Output: ('de', 'en')
    print(catalogs.lookup_locale("de-AT"))
    # Output: de

    # Example 2: Register messages
    print("\n" + "=" * 50)
    print("Example 2: Reference Tokens")
    print("=" * 50)

    config = I18nConfig(project_root=root, shared_strings_source=root / "lib" / "i18n.py")
    registry = InstanceRegistry(catalogs, config=config)
    str_ = registry.declare(root / "audits" / "cache.py", UIStrings)

    document = {
        "audits": {
            "uses-long-cache-ttl": {
                "title": str_(UIStrings["title"]),
                "displayValue": str_(UIStrings["description"], {"itemCount": 1234}),
                "details": {
                    "overallSavingsMs": str_(UI_STRINGS["ms"], {"timeInMs": 1234.5}),
                    "overallSavingsBytes": str_(
                        UI_STRINGS["displayValueByteSavings"], {"wastedBytes": 2048}
                    ),
                },
            },
        },
    }
    print(json.dumps(document, indent=2, ensure_ascii=False))

    # Example 3: Localize the document for each locale
    for locale in ("en", "de"):
        print("\n" + "=" * 50)
        print(f"Example 3: Localized ({locale})")
        print("=" * 50)

        localized = copy.deepcopy(document)
        report = registry.replace_tokens(localized, locale)
        print(json.dumps(localized, indent=2, ensure_ascii=False))
        print(json.dumps(report, indent=2, ensure_ascii=False))

    # Example 4: Tokens stay valid; plain strings pass through
    print("\n" + "=" * 50)
    print("Example 4: get_formatted")
    print("=" * 50)

    token = str_(UIStrings["description"], {"itemCount": 1})
    print(token)
    # Output: audits/cache.py | description # 1
    print(registry.get_formatted(token, "de"))
    # Output: 1 Ressource gefunden
    print(registry.get_formatted("Plain text", "de"))
    # Output: Plain text
