"""Sample products used to seed the in-memory catalogue in development."""

from shopping.catalogue.port import ProductSnapshot


def sample_products(max_order_quantity: int = 10) -> list[ProductSnapshot]:
    rows = [
        ("prod-laptop", "Laptop", "High-performance laptop for professionals", 999.99, 10,
         "https://images.unsplash.com/photo-1496181133206-80ce9b88a853?w=400", "Electronics"),
        ("prod-smartphone", "Smartphone", "Latest model with amazing features", 699.99, 15,
         "https://images.unsplash.com/photo-1511707171634-5f897ff02aa9?w=400", "Electronics"),
        ("prod-headphones", "Headphones", "Wireless noise-cancelling headphones", 199.99, 20,
         "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=400", "Electronics"),
        ("prod-coffee-maker", "Coffee Maker", "Programmable coffee maker", 79.99, 25,
         "https://images.unsplash.com/photo-1517668808822-9ebb02f2a0e6?w=400", "Home"),
        ("prod-backpack", "Backpack", "Durable travel backpack", 49.99, 30,
         "https://images.unsplash.com/photo-1553062407-98eeb64c6a62?w=400", "Fashion"),
        ("prod-running-shoes", "Running Shoes", "Comfortable athletic shoes", 89.99, 18,
         "https://images.unsplash.com/photo-1542291026-7eec264c27ff?w=400", "Fashion"),
        ("prod-desk-lamp", "Desk Lamp", "LED desk lamp with adjustable brightness", 34.99, 22,
         "https://images.unsplash.com/photo-1507473885765-e6ed057f782c?w=400", "Home"),
        ("prod-water-bottle", "Water Bottle", "Insulated stainless steel water bottle", 24.99, 40,
         "https://images.unsplash.com/photo-1602143407151-7111542de6e8?w=400", "Sports"),
    ]
    return [
        ProductSnapshot(
            product_id=product_id,
            name=name,
            description=description,
            price=price,
            stock=stock,
            max_order_quantity=max_order_quantity,
            image_url=image_url,
            category=category,
        )
        for product_id, name, description, price, stock, image_url, category in rows
    ]
