import pytest

from s3mini.auth import Dispatcher
from s3mini.errors import InvalidInvocation, SourceNotFound
from s3mini.objects import ObjectManager
from tests.conftest import FakeSession, make_response


@pytest.fixture
def objects(dispatcher):
    return ObjectManager(dispatcher)


def test_put_end_to_end(tmp_path, objects, session):
    src = tmp_path / 'f.txt'
    src.write_bytes(b'hello')
    resp = objects.put('b', 'f.txt', str(src))
    assert resp.status_code == 200
    call = session.calls[0]
    assert call['method'] == 'PUT'
    assert call['url'] == 'http://s3.example.com/b/f.txt'
    assert call['headers']['Content-MD5'] == 'XUFAKrxLKna5cZ2REBfFkg=='
    assert call['headers']['x-amz-acl'] == 'public-read'


def test_put_defaults_local_file_to_name(tmp_path, objects, session, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / 'notes.txt').write_bytes(b'n')
    objects.put('b', 'notes.txt')
    assert session.calls[0]['body'] == b'n'


def test_put_without_name_creates_bucket(objects, session):
    objects.put('b')
    assert session.calls[0]['url'] == 'http://s3.example.com/b/'
    assert session.calls[0]['headers']['Content-Length'] == '0'


def test_put_missing_file(tmp_path, objects, session):
    with pytest.raises(SourceNotFound):
        objects.put('b', 'f.txt', str(tmp_path / 'missing.txt'))
    assert session.calls == []


def test_get_to_file(tmp_path, config):
    session = FakeSession([make_response(200, b'data')])
    objects = ObjectManager(Dispatcher(config, session=session))
    dest = tmp_path / 'copy.txt'
    objects.get('b', 'f.txt', str(dest))
    assert dest.read_bytes() == b'data'
    assert session.calls[0]['url'] == 'http://s3.example.com/b/f.txt'


def test_get_defaults_local_file_to_name(tmp_path, config, monkeypatch):
    monkeypatch.chdir(tmp_path)
    session = FakeSession([make_response(200, b'data')])
    ObjectManager(Dispatcher(config, session=session)).get('b', 'f.txt')
    assert (tmp_path / 'f.txt').read_bytes() == b'data'


def test_get_dash_means_stdout(config, monkeypatch):
    calls = []
    dispatcher = Dispatcher(config, session=FakeSession())
    monkeypatch.setattr(dispatcher, 'download', lambda *args: calls.append(args))
    ObjectManager(dispatcher).get('b', 'f.txt', '-')
    assert calls == [('b', 'f.txt', None)]


def test_get_and_delete_require_name(objects, session):
    with pytest.raises(InvalidInvocation):
        objects.get('b', '')
    with pytest.raises(InvalidInvocation):
        objects.delete('b', None)
    assert session.calls == []


def test_delete(objects, session):
    objects.delete('b', 'k')
    assert session.calls[0]['method'] == 'DELETE'
    assert session.calls[0]['url'] == 'http://s3.example.com/b/k'


def test_test_reports_success_and_failure(config):
    session = FakeSession([make_response(200), make_response(404, reason='Not Found')])
    objects = ObjectManager(Dispatcher(config, session=session))
    assert objects.test('b', 'k') is True
    assert objects.test('b', 'missing') is False
    assert [c['method'] for c in session.calls] == ['HEAD', 'HEAD']
