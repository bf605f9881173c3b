"""LSDrinks operator CLI.

Usage:
    python src/manage.py seed          # Load demo categories, items, highlights and settings
    python src/manage.py show-config   # Print the effective configuration, secrets masked

The default memory provider lives inside one process, so ``seed`` only persists
with a shared database. For a demo server set SEED_DEMO_DATA=1 and the app
seeds itself on startup.
"""

import argparse
import json
import sys

DEMO_CATEGORIES = {
    "Cervejas": [
        ("Heineken Long Neck", "Cerveja lager puro malte, garrafa 330ml.", 7.5),
        ("Corona Extra", "Cerveja mexicana leve, long neck 355ml.", 8.9),
    ],
    "Destilados": [
        ("Vodka Absolut", "Vodka sueca premium, garrafa de 1 litro.", 89.9),
        ("Gin Tanqueray", "Gin London Dry, garrafa de 750ml.", 129.0),
    ],
    "Sem Álcool": [
        ("Água com Gás", "Água mineral gaseificada, garrafa 500ml.", 3.5),
    ],
}

DEMO_HIGHLIGHTS = [
    (
        "Happy Hour",
        "Cervejas com 20% de desconto das 18h às 20h.",
        "https://images.example.com/banners/happy-hour.jpg",
        "https://lsdrinks.example.com/items?search=cerveja",
    ),
    (
        "Frete Grátis",
        "Pedidos acima de R$ 100 com entrega gratuita.",
        "https://images.example.com/banners/frete.jpg",
        "https://lsdrinks.example.com/",
    ),
]


def seed_catalogue():
    from catalogue.category.management import CreateCategory
    from catalogue.domain import catalogue
    from catalogue.highlight.management import CreateHighlight
    from catalogue.item.management import CreateItem

    with catalogue.domain_context():
        for category_name, items in DEMO_CATEGORIES.items():
            category_id = catalogue.process(CreateCategory(name=category_name), asynchronous=False)
            for title, description, price in items:
                catalogue.process(
                    CreateItem(title=title, description=description, price=price, category_id=category_id),
                    asynchronous=False,
                )
            print(f"  {category_name}: {len(items)} items")

        for title, description, image_url, link in DEMO_HIGHLIGHTS:
            catalogue.process(
                CreateHighlight(title=title, description=description, image_url=image_url, link=link, is_active=True),
                asynchronous=False,
            )
        print(f"  {len(DEMO_HIGHLIGHTS)} highlights")


def seed_settings():
    from ordering.domain import ordering
    from ordering.settings.payment import SavePaymentSettings
    from ordering.settings.store import SaveStoreSettings

    with ordering.domain_context():
        ordering.process(SaveStoreSettings(store_name="LSDrinks", delivery_fee=5.0), asynchronous=False)
        ordering.process(SavePaymentSettings(is_payment_on_delivery_enabled=True), asynchronous=False)
    print("  store and payment settings")


def seed():
    """Load demo data into already initialized domains."""
    print("Seeding catalogue...")
    seed_catalogue()
    print("Seeding settings...")
    seed_settings()
    print("Done.")


def show_config():
    from config import AppConfig

    print(json.dumps(AppConfig.from_env().masked(), indent=2))


def main():
    parser = argparse.ArgumentParser(description="LSDrinks management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("seed", help="Load demo catalogue data and default settings")
    subparsers.add_parser("show-config", help="Print the effective configuration")

    args = parser.parse_args()

    if args.command == "seed":
        from catalogue.domain import catalogue
        from ordering.domain import ordering

        catalogue.init()
        ordering.init()
        seed()
    elif args.command == "show-config":
        show_config()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
