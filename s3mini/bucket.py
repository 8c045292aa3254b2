import logging
from dataclasses import dataclass, field

from .codec import extract_elements
from .errors import InvalidInvocation

logger = logging.getLogger(__name__)


@dataclass
class ListingPage:
    """One page of a listing, in the order the server returned it."""
    items: list = field(default_factory=list)
    truncated: bool = False
    next_marker: str = None

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, index):
        return self.items[index]


class BucketManager:
    def __init__(self, dispatcher):
        self.dispatcher = dispatcher

    def list_buckets(self) -> list:
        resp = self.dispatcher.request('GET')
        return extract_elements(resp.content, 'Name')

    def list_objects(self, bucket_name: str, prefix: str = '', marker: str = '') -> ListingPage:
        """List the first page of keys in a bucket.

        Pass the returned ``next_marker`` back as ``marker`` to fetch the
        following page.
        """
        if not bucket_name:
            raise InvalidInvocation('A bucket name is required to list objects')

        params = {}
        if prefix:
            params['prefix'] = prefix
        if marker:
            params['marker'] = marker
        resp = self.dispatcher.request('GET', bucket=bucket_name, params=params or None)

        keys = extract_elements(resp.content, 'Key')
        truncated = any(v.strip().lower() == 'true'
                        for v in extract_elements(resp.content, 'IsTruncated'))
        next_marker = None
        if truncated:
            markers = extract_elements(resp.content, 'NextMarker')
            next_marker = markers[0] if markers else (keys[-1] if keys else None)
            logger.warning("Listing of %s is truncated after %d keys, next marker %r",
                           bucket_name, len(keys), next_marker)
        return ListingPage(items=keys, truncated=truncated, next_marker=next_marker)

    def delete_all(self, bucket_name: str) -> list:
        """Delete every key of the first listing page, in listing order.

        Stops at the first failed delete and raises its error; keys deleted
        before it stay deleted. Keys beyond the first page are left alone.
        """
        page = self.list_objects(bucket_name)
        deleted = []
        for key in page:
            self.dispatcher.request('DELETE', bucket=bucket_name, resource=key)
            logger.info("Deleted %s/%s", bucket_name, key)
            deleted.append(key)
        if page.truncated:
            logger.warning("Only the first page of %s was deleted, run again to continue",
                           bucket_name)
        return deleted
