# orders/services/stats.py

from __future__ import annotations

from django.db.models import Count, Sum
from django.utils import timezone

from orders.models import Order


def order_stats() -> dict:
    """Dashboard counters: orders per status, delivered revenue, orders today."""
    by_status = {
        row["status"]: row["n"]
        for row in Order.objects.order_by().values("status").annotate(n=Count("id"))
    }

    revenue = (
        Order.objects.filter(status=Order.STATUS_DELIVERED)
        .aggregate(total=Sum("total_amount"))
        .get("total")
        or 0
    )

    today = timezone.localdate()
    orders_today = Order.objects.filter(created_at__date=today).count()

    return {
        "total_orders": sum(by_status.values()),
        "by_status": {code: by_status.get(code, 0) for code, _ in Order.STATUS_CHOICES},
        "revenue": int(revenue),
        "orders_today": orders_today,
    }
