from sawa_admin.gateways.base import Gateway
from sawa_admin.schemas.catalog import Category, Feature, HouseType


class CategoriesGateway(Gateway[Category]):
    resource = "categories"
    model = Category
    label = "category"
    plural = "categories"


class HouseTypesGateway(Gateway[HouseType]):
    resource = "house-types"
    model = HouseType
    label = "house type"


class FeaturesGateway(Gateway[Feature]):
    resource = "features"
    model = Feature
    label = "feature"
