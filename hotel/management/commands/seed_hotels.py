from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from hotel.models import Hotel
from room.models import Room

OWNER_EMAIL = "hotelowner@example.com"

HOTELS = [
    {
        "name": "Sea Breeze Villa",
        "address": "ECR Road, Kovalam, Chennai, Tamil Nadu 603112",
        "contact": "+91-44-27452345",
        "city": "Chennai",
        "rating": 4.8,
        "description": "Beachfront villa on the Bay of Bengal.",
        "rooms": [
            ("Deluxe Sea View", "8,500", 2, "King", ["Sea View", "Balcony", "Free WiFi"]),
            ("Premium Ocean Suite", "15,000", 3, "King + Sofa Bed", ["Ocean View", "Private Balcony", "In-room Dining"]),
            ("Family Beach Room", "12,500", 4, "2 Queen Beds", ["Beach Access", "Family Friendly"]),
        ],
    },
    {
        "name": "Marina Bay Resort",
        "address": "Marina Beach Road, Chennai, Tamil Nadu 600001",
        "contact": "+91-44-28561234",
        "city": "Chennai",
        "rating": 4.6,
        "description": "Views of Marina Beach for business and leisure travelers.",
        "rooms": [
            ("Executive Suite", "12,000", 2, "King", ["Jacuzzi", "City View", "Business Center Access"]),
            ("Family Suite", "18,000", 5, "King + 2 Twin Beds", ["Two Bedrooms", "Living Room", "Kitchen"]),
            ("Deluxe Twin Room", "9,500", 2, "2 Twin Beds", ["Free WiFi", "Work Desk"]),
        ],
    },
    {
        "name": "Landmark Villa",
        "address": "Vadanemmeli, Nemmeli",
        "contact": "+91 9940047463",
        "city": "Chennai",
        "rating": 4.5,
        "description": "",
        "rooms": [
            ("Double Bed", "11,800", None, "", ["Room Service", "Pool Access"]),
        ],
    },
    {
        "name": "Heritage Mansion",
        "address": "White Town, Pondicherry 605001",
        "contact": "+91-413-2226789",
        "city": "Pondicherry",
        "rating": 4.9,
        "description": "Preserved colonial building in White Town.",
        "rooms": [
            ("Heritage Suite", "14,500", 3, "King + Day Bed", ["Heritage Design", "Lounge Area"]),
            ("Single Room", "5,000", None, "Single", ["Free WiFi"]),
        ],
    },
    {
        "name": "Seaside Retreat",
        "address": "Promenade Beach, Pondicherry 605001",
        "contact": "+91-413-2345678",
        "city": "Pondicherry",
        "rating": 4.8,
        "description": "French architecture by the sea.",
        "rooms": [
            ("Luxury King Room", "9,800", 2, "King", ["King Bed", "Ocean View"]),
        ],
    },
]


class Command(BaseCommand):
    help = "Seed demo hotels and rooms in Chennai and Pondicherry"

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete the demo owner's hotels (and their rooms) first",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        owner, created = get_user_model().objects.get_or_create(
            email=OWNER_EMAIL,
            defaults={
                "username": "Hotel Owner",
                "role": get_user_model().Role.HOTEL_OWNER,
            },
        )
        if created:
            owner.set_unusable_password()
            owner.save(update_fields=["password"])

        if options["reset"]:
            deleted, _ = Hotel.objects.filter(owner=owner).delete()
            self.stdout.write(f"Deleted {deleted} existing rows")
        elif Hotel.objects.filter(owner=owner).exists():
            self.stdout.write(self.style.WARNING("Demo hotels already exist, use --reset"))
            return

        room_count = 0
        for data in HOTELS:
            data = dict(data)
            rooms = data.pop("rooms")
            hotel = Hotel.objects.create(owner=owner, main_image="roomImg11.png", **data)
            for room_type, price, capacity, bed_type, amenities in rooms:
                Room.objects.create(
                    hotel=hotel,
                    room_type=room_type,
                    price_per_night=price,
                    capacity=capacity,
                    bed_type=bed_type,
                    amenities=amenities,
                    images=["roomImg11.png"],
                )
                room_count += 1

        self.stdout.write(
            self.style.SUCCESS(f"Seeded {len(HOTELS)} hotels and {room_count} rooms")
        )
