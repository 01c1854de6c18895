from __future__ import annotations

import asyncio

import restobar.restobar_app as app_module
from restobar.restobar_app import RestobarApp


def test_waiter_sends_an_order_from_the_tables_view(repo, monkeypatch):
    monkeypatch.setattr(app_module, "check_printer_dependencies", lambda: (False, "Printing off"))
    app = RestobarApp(repo)

    async def run() -> None:
        async with app.run_test(size=(140, 40)) as pilot:
            await pilot.pause()
            # Waiter is the first role on the login screen.
            await pilot.press("enter", *"mesero", "tab", *"mesero123", "enter")
            await pilot.pause()
            assert app.role == "mesero"
            assert app.current_view == "tables"

            await pilot.press("enter")
            await pilot.pause()
            await pilot.press("enter")
            await pilot.press("ctrl+s")
            await pilot.pause()

    asyncio.run(run())

    orders = repo.get_orders()
    assert len(orders) == 1
    assert orders[0].table_number == 1
    assert orders[0].waiter_name == "Juan Pérez"
    assert orders[0].items[0].product_name == "Tequeños"


def test_wrong_password_keeps_the_login_open(repo, monkeypatch):
    monkeypatch.setattr(app_module, "check_printer_dependencies", lambda: (False, "Printing off"))
    app = RestobarApp(repo)

    async def run() -> None:
        async with app.run_test(size=(140, 40)) as pilot:
            await pilot.pause()
            await pilot.press("enter", *"mesero", "tab", *"nope", "enter")
            await pilot.pause()
            assert app.role is None
            assert app.screen.error == "Wrong username or password."

    asyncio.run(run())
