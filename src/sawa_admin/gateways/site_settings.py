from sawa_admin.gateways.base import Gateway
from sawa_admin.schemas.site_setting import SiteSetting


class SiteSettingsGateway(Gateway[SiteSetting]):
    resource = "settings"
    model = SiteSetting
    label = "setting"
