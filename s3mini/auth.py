import logging
import os
import sys

import requests
from requests.utils import requote_uri

from .codec import escape_path, extract_elements
from .errors import InvalidInvocation, SourceNotFound, TransportError, UnsupportedVerb
from .utils import ACL_HEADER, S3Signer

logger = logging.getLogger(__name__)

VERBS = ('GET', 'PUT', 'DELETE', 'HEAD')
STREAM_CHUNK_SIZE = 8192


class Dispatcher:
    """Signs S3 requests with the v2 scheme and sends them over HTTP.

    One call to :meth:`request` is exactly one HTTP request: nothing is
    retried and the only timeout is the connect timeout from the config.
    """

    def __init__(self, config, session: requests.Session = None):
        self.config = config
        self.session = session or requests.Session()

    def resource_path(self, bucket: str = '', resource: str = '') -> (str, str):
        # Quoted the way requests will send it, so the signed path is the wire path
        bucket_part = requote_uri(f"/{bucket}") if bucket else ''
        return bucket_part, requote_uri('/' + escape_path(resource or ''))

    def url(self, bucket: str = '', resource: str = '') -> str:
        bucket_part, resource_part = self.resource_path(bucket, resource)
        return f"http://{self.config.host}{bucket_part}{resource_part}"

    def sign(self, verb: str, date: str, bucket: str = '', resource: str = '',
             md5: str = '', amz_headers: str = '') -> dict:
        bucket_part, resource_part = self.resource_path(bucket, resource)
        string_to_sign = S3Signer.canonical_string(
            verb, date, bucket=bucket_part, resource=resource_part,
            md5=md5, amz_headers=amz_headers
        )
        logger.debug("StringToSign:\n%s", string_to_sign)
        signature = S3Signer.sign(string_to_sign, self.config.credentials.secret_key)

        headers = {
            'Authorization': f"AWS {self.config.credentials.access_key}:{signature}",
            'Date': date,
        }
        if md5:
            headers['Content-MD5'] = md5
        return headers

    def request(self, verb: str, bucket: str = '', resource: str = '', source: str = None,
                params: dict = None) -> requests.Response:
        verb = (verb or '').upper()
        if verb not in VERBS:
            raise UnsupportedVerb(verb)

        date = S3Signer.http_date()
        url = self.url(bucket, resource)

        if verb == 'PUT':
            if not bucket:
                raise InvalidInvocation('PUT requires a bucket')
            if not resource:
                headers = self.sign(verb, date, bucket)
                headers['Content-Length'] = '0'
                return self._send(verb, url, headers, data=b'', params=params)

            if not source or not os.path.isfile(source):
                raise SourceNotFound(source or '')
            try:
                fh = open(source, 'rb')
            except OSError as e:
                raise InvalidInvocation(f"Cannot read '{source}': {e.strerror}") from e
            with fh:
                md5 = S3Signer.content_md5(fh)
                fh.seek(0)
                headers = self.sign(verb, date, bucket, resource, md5=md5, amz_headers=ACL_HEADER)
                headers['x-amz-acl'] = 'public-read'
                headers['Expect'] = '100-continue'
                return self._send(verb, url, headers, data=fh, params=params)

        headers = self.sign(verb, date, bucket, resource)
        return self._send(verb, url, headers, params=params, stream=(verb == 'GET'))

    def download(self, bucket: str, resource: str, dest=None) -> requests.Response:
        """GET an object and stream its body to ``dest``.

        ``dest`` is a path or a binary file object; None means stdout.
        """
        resp = self.request('GET', bucket, resource)
        self._save(resp, dest)
        return resp

    def _send(self, verb: str, url: str, headers: dict, data=None, params: dict = None,
              stream: bool = False) -> requests.Response:
        logger.info("%s %s", verb, url)
        try:
            resp = self.session.request(
                verb, url, headers=headers, data=data, params=params,
                timeout=(self.config.connect_timeout, None), stream=stream
            )
        except requests.RequestException as e:
            raise TransportError(f"{verb} {url} failed: {e}") from e
        logger.debug("%s %s -> %s", verb, url, resp.status_code)

        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            raise self._error_from_response(verb, url, resp) from e
        return resp

    @staticmethod
    def _error_from_response(verb: str, url: str, resp: requests.Response) -> TransportError:
        code = message = None
        # HEAD responses carry no body to explain the failure
        if verb != 'HEAD' and resp.content:
            codes = extract_elements(resp.content, 'Code')
            messages = extract_elements(resp.content, 'Message')
            code = codes[0] if codes else None
            message = messages[0] if messages else None
        detail = f"{code}: {message}" if code else (resp.reason or 'error')
        return TransportError(
            f"{verb} {url} returned {resp.status_code} ({detail})",
            status_code=resp.status_code, code=code
        )

    @staticmethod
    def _copy(resp: requests.Response, out) -> None:
        try:
            for chunk in resp.iter_content(STREAM_CHUNK_SIZE):
                out.write(chunk)
        except requests.RequestException as e:
            raise TransportError(f"Download of {resp.url} interrupted: {e}") from e

    @classmethod
    def _save(cls, resp: requests.Response, dest) -> None:
        if dest is None:
            out = sys.stdout.buffer
            cls._copy(resp, out)
            out.flush()
            return
        if hasattr(dest, 'write'):
            cls._copy(resp, dest)
            return

        try:
            fh = open(dest, 'wb')
        except OSError as e:
            raise InvalidInvocation(f"Cannot write '{dest}': {e.strerror}") from e
        try:
            with fh:
                cls._copy(resp, fh)
        except TransportError:
            os.remove(dest)
            raise
