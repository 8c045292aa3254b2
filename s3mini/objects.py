import logging

from .errors import InvalidInvocation, TransportError

logger = logging.getLogger(__name__)

STDOUT = '-'


class ObjectManager:
    def __init__(self, dispatcher):
        self.dispatcher = dispatcher

    def put(self, bucket_name: str, name: str = None, local_file: str = None):
        """Upload ``local_file`` (default: ``name``) as ``bucket_name/name``.

        Without a name the bucket itself is created.
        """
        if not name:
            return self.dispatcher.request('PUT', bucket=bucket_name)
        return self.dispatcher.request('PUT', bucket=bucket_name, resource=name,
                                       source=local_file or name)

    def get(self, bucket_name: str, name: str, local_file: str = None):
        if not name:
            raise InvalidInvocation('An object name is required')
        dest = local_file or name
        if dest == STDOUT:
            dest = None
        return self.dispatcher.download(bucket_name, name, dest)

    def delete(self, bucket_name: str, name: str):
        if not name:
            raise InvalidInvocation('An object name is required')
        return self.dispatcher.request('DELETE', bucket=bucket_name, resource=name)

    def test(self, bucket_name: str, name: str) -> bool:
        try:
            self.dispatcher.request('HEAD', bucket=bucket_name, resource=name)
        except TransportError as e:
            logger.debug("HEAD %s/%s failed: %s", bucket_name, name, e)
            return False
        return True
