from sawa_admin.gateways.base import Gateway
from sawa_admin.schemas.booking import Booking


class BookingsGateway(Gateway[Booking]):
    resource = "bookings"
    model = Booking
    label = "booking"
