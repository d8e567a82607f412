from django.db.models import Case, F, IntegerField, Value, When

# Checked in order; the first label fragment found in the room type wins.
CAPACITY_BY_ROOM_TYPE = (
    ("single", 1),
    ("double", 2),
    ("family", 4),
)
DEFAULT_CAPACITY = 2


def capacity_from_room_type(room_type: str) -> int:
    label = (room_type or "").casefold()
    for fragment, capacity in CAPACITY_BY_ROOM_TYPE:
        if fragment in label:
            return capacity
    return DEFAULT_CAPACITY


def room_capacity(room) -> int:
    """Maximum guests for ``room``: its explicit capacity, else the label rule."""
    if room.capacity:
        return room.capacity
    return capacity_from_room_type(room.room_type)


def room_capacity_expression():
    """``room_capacity`` as a query expression over ``capacity`` and ``room_type``."""
    return Case(
        When(capacity__gt=0, then=F("capacity")),
        *(
            When(room_type__icontains=fragment, then=Value(capacity))
            for fragment, capacity in CAPACITY_BY_ROOM_TYPE
        ),
        default=Value(DEFAULT_CAPACITY),
        output_field=IntegerField(),
    )
