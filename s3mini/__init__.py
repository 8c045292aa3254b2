from .config import Config, Credentials, load_config
from .auth import Dispatcher
from .bucket import BucketManager, ListingPage
from .objects import ObjectManager

__all__ = [
    'Config',
    'Credentials',
    'load_config',
    'Dispatcher',
    'BucketManager',
    'ListingPage',
    'ObjectManager',
]
