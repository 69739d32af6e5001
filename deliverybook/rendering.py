"""Rendering helpers that turn entities into rich Text rows."""

from __future__ import annotations

from rich.text import Text

from deliverybook.models import Customer, Dish, Driver, DriverStatus, Entity, Order, OrderStatus

_STATUS_STYLES: dict[DriverStatus | OrderStatus, str] = {
    DriverStatus.AVAILABLE: "bold #0b1f0f on #5fbf72",
    DriverStatus.UNAVAILABLE: "bold #ffffff on #6b6b6b",
    DriverStatus.DELIVERING: "bold #ffffff on #2f6db5",
    OrderStatus.PENDING: "bold #1f1600 on #e0b341",
    OrderStatus.PREPARING: "bold #ffffff on #b2663a",
    OrderStatus.DELIVERING: "bold #ffffff on #2f6db5",
    OrderStatus.DELIVERED: "bold #0b1f0f on #5fbf72",
    OrderStatus.CANCELLED: "bold #ffffff on #b23a48",
}


def status_badge_style(status: DriverStatus | OrderStatus) -> str:
    """Return a consistent badge style for a status tag."""
    return _STATUS_STYLES.get(status, "bold")


def format_status_badge(status: DriverStatus | OrderStatus) -> Text:
    return Text(f" {status.value} ", style=status_badge_style(status))


def format_customer(customer: Customer) -> Text:
    text = Text()
    text.append(customer.name.value, style="bold")
    for tag in sorted(customer.tags):
        text.append(" ")
        text.append(f"[{tag.value}]", style="white on #3d3d5c")
    text.append(f"\n      {customer.phone.value} · {customer.email.value}")
    text.append(f"\n      {customer.address.value}", style="dim")
    return text


def format_driver(driver: Driver) -> Text:
    text = Text()
    text.append_text(format_status_badge(driver.status))
    text.append(" ")
    text.append(driver.name.value, style="bold")
    text.append(f"  {driver.phone.value}")
    return text


def format_dish(dish: Dish) -> Text:
    text = Text()
    text.append(dish.name.value, style="bold")
    text.append(f"  {dish.price}")
    return text


def format_order(order: Order) -> Text:
    """Render an order card: number, status, customer, driver and dishes."""
    text = Text()
    text.append(f"#{order.order_number} ", style="bold")
    text.append_text(format_status_badge(order.status))
    text.append(f" {order.customer_name} ({order.customer_phone})")
    text.append(f"\n      Driver: {order.driver_name}")
    dishes = ", ".join(dish.name.value for dish in order.dishes)
    text.append(f"\n      {dishes}  ", style="dim")
    text.append(f"${order.total:.2f}")
    return text


def format_entity(entity: Entity) -> Text:
    if isinstance(entity, Customer):
        return format_customer(entity)
    if isinstance(entity, Driver):
        return format_driver(entity)
    if isinstance(entity, Dish):
        return format_dish(entity)
    return format_order(entity)


def format_entity_list(entities: list[Entity], empty: str = "(none)") -> Text | str:
    """Render every entity as a numbered row, matching the indices commands resolve against."""
    if not entities:
        return empty

    lines = Text()
    for idx, entity in enumerate(entities):
        if idx:
            lines.append("\n")
        lines.append(f"{idx + 1}. ")
        lines.append_text(format_entity(entity))
    return lines
