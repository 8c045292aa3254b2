import hashlib
import hmac
import base64
import datetime

from .errors import MissingRequiredField

ACL_HEADER = 'x-amz-acl:public-read'
DATE_FORMAT = '%a, %d %b %Y %H:%M:%S +0000'


class S3Signer:
    @staticmethod
    def http_date(now: datetime.datetime = None) -> str:
        now = now or datetime.datetime.now(datetime.timezone.utc)
        if now.tzinfo is not None:
            now = now.astimezone(datetime.timezone.utc)
        return now.strftime(DATE_FORMAT)

    @staticmethod
    def canonical_string(verb: str, date: str, bucket: str = '', resource: str = '',
                         md5: str = '', mime: str = '', amz_headers: str = '') -> str:
        """
        AWS Signature Version 2 string to sign.
        - verb, date: mandatory
        - bucket + resource: canonical resource, e.g. "/bucket" + "/key"
        - amz_headers: already canonicalized x-amz-* header line(s)
        Empty fields still produce their line, so the layout never changes.
        """
        if not verb:
            raise MissingRequiredField('verb')
        if not date:
            raise MissingRequiredField('date')
        return "\n".join([
            verb,
            md5 or '',
            mime or '',
            date,
            amz_headers or '',
            (bucket or '') + (resource or '')
        ])

    @staticmethod
    def sign(string_to_sign: str, secret_key: str) -> str:
        # HMAC-SHA1 + Base64
        sig = hmac.new(secret_key.encode('utf-8'),
                       string_to_sign.encode('utf-8'),
                       hashlib.sha1).digest()
        return base64.b64encode(sig).decode('utf-8')

    @staticmethod
    def content_md5(fileobj, chunk_size: int = 8192) -> str:
        digest = hashlib.md5()
        for chunk in iter(lambda: fileobj.read(chunk_size), b''):
            digest.update(chunk)
        return base64.b64encode(digest.digest()).decode('utf-8')
