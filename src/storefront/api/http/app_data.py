from dataclasses import dataclass

from src.storefront.core.services import DbSessionService, PageCache
from src.storefront.core.storage import AssetStorage
from src.storefront.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    config: ConfigData
    database_service: DbSessionService
    asset_storage: AssetStorage
    page_cache: PageCache
