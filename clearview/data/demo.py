"""Seed documents used when no Supabase project is configured."""

from datetime import datetime
from typing import Any

DEMO_INVENTORY: dict[str, int] = {
    '12"': 4, '14"': 3, '16"': 5, '17"': 6, '18"': 8, '19"': 4,
    '20"': 3, '21"': 2, '22"': 5, '24"': 4, '25"': 2, '26"': 10, '28"': 3,
}


def demo_documents(now: datetime) -> dict[str, list[dict[str, Any]]]:
    """Demo collections keyed by collection name, stamped with ``now``."""
    created = now.isoformat()
    customers = [
        {
            "id": "demo1",
            "name": "Sarah Johnson",
            "phone": "555-0123",
            "email": "sarah@example.com",
            "address": "142 Oak Street",
            "vehicles": [
                {
                    "make": "Toyota",
                    "model": "Camry",
                    "year": "2021",
                    "wiperSizes": {"driver": '26"', "passenger": '18"', "rear": None},
                }
            ],
            "createdAt": created,
        },
        {
            "id": "demo2",
            "name": "Mike Chen",
            "phone": "555-0456",
            "email": "mike@example.com",
            "address": "88 Elm Avenue",
            "vehicles": [
                {
                    "make": "Honda",
                    "model": "CR-V",
                    "year": "2020",
                    "wiperSizes": {"driver": '26"', "passenger": '17"', "rear": '12"'},
                }
            ],
            "createdAt": created,
        },
    ]
    jobs = [
        {
            "id": "j1",
            "customerId": "demo1",
            "customerName": "Sarah Johnson",
            "vehicleIndex": 0,
            "status": "scheduled",
            "scheduledDate": "2026-02-15",
            "blades": [
                {"size": '26"', "position": "Driver"},
                {"size": '18"', "position": "Passenger"},
            ],
            "createdAt": created,
            "price": 35,
        },
        {
            "id": "j2",
            "customerId": "demo2",
            "customerName": "Mike Chen",
            "vehicleIndex": 0,
            "status": "pending",
            "scheduledDate": None,
            "blades": [
                {"size": '26"', "position": "Driver"},
                {"size": '17"', "position": "Passenger"},
                {"size": '12"', "position": "Rear"},
            ],
            "createdAt": created,
            "price": 45,
        },
    ]
    return {
        "customers": customers,
        "jobs": jobs,
        "expenses": [],
        "data": [{"id": "inventory", "counts": dict(DEMO_INVENTORY)}],
    }
