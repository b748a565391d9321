"""All gateways of one session, built from a single ApiClient."""

from dataclasses import dataclass

from sawa_admin.client import ApiClient
from sawa_admin.gateways.auth import AuthGateway
from sawa_admin.gateways.bookings import BookingsGateway
from sawa_admin.gateways.catalog import CategoriesGateway, FeaturesGateway, HouseTypesGateway
from sawa_admin.gateways.listings import ListingsGateway
from sawa_admin.gateways.notifications import NotificationsGateway
from sawa_admin.gateways.profile import ProfileGateway
from sawa_admin.gateways.reviews import ReviewsGateway
from sawa_admin.gateways.site_settings import SiteSettingsGateway
from sawa_admin.gateways.transactions import TransactionsGateway
from sawa_admin.gateways.uploads import UploadsGateway
from sawa_admin.gateways.users import StaffGateway, UsersGateway


@dataclass(frozen=True)
class Gateways:
    auth: AuthGateway
    uploads: UploadsGateway
    users: UsersGateway
    staff: StaffGateway
    listings: ListingsGateway
    categories: CategoriesGateway
    house_types: HouseTypesGateway
    features: FeaturesGateway
    reviews: ReviewsGateway
    bookings: BookingsGateway
    transactions: TransactionsGateway
    notifications: NotificationsGateway
    profile: ProfileGateway
    site_settings: SiteSettingsGateway

    @classmethod
    def build(cls, client: ApiClient) -> "Gateways":
        return cls(
            auth=AuthGateway(client),
            uploads=UploadsGateway(client, default_folder=client.settings.image_upload_folder),
            users=UsersGateway(client),
            staff=StaffGateway(client),
            listings=ListingsGateway(client),
            categories=CategoriesGateway(client),
            house_types=HouseTypesGateway(client),
            features=FeaturesGateway(client),
            reviews=ReviewsGateway(client),
            bookings=BookingsGateway(client),
            transactions=TransactionsGateway(client),
            notifications=NotificationsGateway(client),
            profile=ProfileGateway(client),
            site_settings=SiteSettingsGateway(client),
        )
