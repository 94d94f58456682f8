from app.models.building import Building  # noqa: F401
from app.models.room import Room, RoomType  # noqa: F401
from app.models.timetable import Timetable  # noqa: F401
