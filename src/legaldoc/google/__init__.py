"""legaldoc.google

The interface layer for the Google services used by legaldoc. Storage code
should go through :class:`GoogleCloud` rather than importing googleapiclient:

    from legaldoc.google import GoogleCloud

    gc = GoogleCloud.from_env("my-bucket")
    gc.storage.upload_file("contract.pdf", object_name="abc.pdf", content_type="application/pdf")
"""

from ._auth import AuthConfig, load_credentials
from ._retry import RetryConfig
from .gcs import CloudStorageFacade
from .google import GoogleCloud

__all__ = [
    "AuthConfig",
    "CloudStorageFacade",
    "GoogleCloud",
    "RetryConfig",
    "load_credentials",
]
