"""
Checkout — cart, stock check and order submission against an echo server.

Level 5: scoops.checkout
Level 4: scoops.api (httpx + combinators.retry)
Level 2: kungfu.Result
"""

from kungfu import Ok, Error
from scoops import Settings, Shop
from scoops import cart as Cart
from scoops import checkout as Co
from scoops.config import ApiConfig
from examples._infra import EchoServer, banner, run


async def main() -> None:
    # The first two requests hit a busy server; retries absorb them
    echo = EchoServer(fail_first=2)
    settings = Settings(api=ApiConfig(base_url="https://echo.local", retries=2, retry_backoff=0.05))

    async with Shop(settings, transport=echo.transport()) as shop:
        banner("Cart")
        vanilla, mint = shop.catalog[1], shop.catalog[4]
        shop.cart.subscribe(lambda snap: print(f"  {Cart.badge_label(snap.item_count)}"))
        shop.cart.add(vanilla)
        shop.cart.add(vanilla)
        shop.cart.add(mint)
        print()
        print(Cart.format_summary(shop.cart.snapshot()))

        banner("Proceed to checkout")
        match await Co.CartGate(shop.cart, shop.api).proceed():
            case Ok(decision) if decision.shortfalls:
                for s in decision.shortfalls:
                    print(f"  ! low stock, continuing: {s}")
            case Ok(_):
                print("  ✓ all in stock")
            case Error(e):
                print(f"  ✗ {e}")

        banner("Place order")
        form = Co.CheckoutForm(name="Ann", email="not-an-email", address="", card_number="4111")
        match await shop.orchestrator.submit(form):
            case Error(Co.ValidationError() as invalid):
                for err in invalid.errors:
                    print(f"  ✗ {err.field}: {err.message}")
            case other:
                print(f"  unexpected: {other}")

        form = Co.CheckoutForm(
            name="Jessica Anderson",
            email="jessica@demo.net",
            address="654 Maple Dr, Phoenix, AZ 85001",
            card_number="4111111111111111",
        )
        match await shop.orchestrator.submit(form):
            case Ok(confirmation):
                print(f"  ✓ {confirmation.message} {confirmation.order_id}")
                print(f"    delivery in {confirmation.estimated_delivery}, paid ${confirmation.total}")
            case Error(e):
                print(f"  ✗ {e}")

        print(f"\nRequests sent: {echo.seen}, cart now: {Cart.badge_label(shop.cart.item_count)}")


if __name__ == "__main__":
    run(main)
