"""Tests for the chunk upload API endpoints."""

import threading
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from uploadserver.main import create_app


def upload(client, name, index, payload):
    return client.post(
        '/upload_chunk',
        files={'file': (name, payload)},
        data={'index': index}
    )


def test_root_endpoint(client):
    response = client.get('/')
    assert response.status_code == 200
    assert response.json()['status'] == 'running'


def test_health_endpoint(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.json() == {'status': 'healthy', 'service': 'uploadserver'}


def test_upload_chunk_success(client, registry, staging_dir):
    response = upload(client, 'report.pdf', '0', b'AAA')

    assert response.status_code == 200
    data = response.json()
    assert data['message'] == 'Chunk 0 uploaded successfully'
    assert data['file_name'] == 'report.pdf'
    assert data['index'] == 0
    assert data['size'] == 3
    assert 'X-Request-ID' in response.headers

    chunks = registry.get_chunks('report.pdf')
    assert len(chunks) == 1
    assert chunks[0].index == 0
    assert chunks[0].location == str(staging_dir / 'report.pdf_part_0')
    assert Path(chunks[0].location).read_bytes() == b'AAA'


def test_two_chunks_of_same_file(client, registry):
    assert upload(client, 'report.pdf', '0', b'AAA').status_code == 200
    assert upload(client, 'report.pdf', '1', b'BBB').status_code == 200

    chunks = registry.get_chunks('report.pdf')
    assert {c.index for c in chunks} == {0, 1}
    contents = {c.index: Path(c.location).read_bytes() for c in chunks}
    assert contents == {0: b'AAA', 1: b'BBB'}


def test_reupload_overwrites_storage_and_grows_registry(client, registry):
    upload(client, 'report.pdf', '0', b'first')
    upload(client, 'report.pdf', '0', b'second')

    chunks = registry.get_chunks('report.pdf')
    assert len(chunks) == 2
    assert chunks[0].location == chunks[1].location
    assert Path(chunks[1].location).read_bytes() == b'second'


def test_index_with_plus_sign(client, registry):
    response = upload(client, 'report.pdf', '+7', b'AAA')
    assert response.status_code == 200
    assert registry.get_chunks('report.pdf')[0].index == 7


@pytest.mark.parametrize('index', ['x', '', '1.5', '-1', ' 2', '1_000'])
def test_invalid_index_rejected(client, registry, staging_dir, index):
    response = upload(client, 'report.pdf', index, b'AAA')

    assert response.status_code == 400
    assert response.json()['code'] == 'INVALID_CHUNK_REQUEST'
    assert registry.file_count() == 0
    assert not staging_dir.exists()


@pytest.mark.parametrize('index', [
    pytest.param('9' * 5000, id='beyond-int-conversion-limit'),
    pytest.param('9' * 300, id='300-digits'),
    pytest.param('9223372036854775808', id='int64-max-plus-one'),
])
def test_out_of_range_index_rejected(client, registry, staging_dir, index):
    response = upload(client, 'report.pdf', index, b'AAA')

    assert response.status_code == 400
    assert response.json()['code'] == 'INVALID_CHUNK_REQUEST'
    assert registry.file_count() == 0
    assert not staging_dir.exists()


def test_invalid_index_leaves_existing_entries_unchanged(client, registry):
    upload(client, 'report.pdf', '0', b'AAA')

    response = upload(client, 'report.pdf', 'x', b'BBB')

    assert response.status_code == 400
    assert registry.chunk_count('report.pdf') == 1


def test_missing_index_rejected(client, registry):
    response = client.post('/upload_chunk', files={'file': ('report.pdf', b'AAA')})

    assert response.status_code == 400
    assert response.json()['code'] == 'INVALID_CHUNK_REQUEST'
    assert registry.file_count() == 0


def test_missing_payload_rejected(client, registry, staging_dir):
    response = client.post('/upload_chunk', data={'index': '0'})

    assert response.status_code == 400
    assert response.json()['code'] == 'INVALID_CHUNK_REQUEST'
    assert registry.file_count() == 0
    assert not staging_dir.exists()


def test_file_field_sent_as_text_rejected(client, registry, staging_dir):
    response = client.post('/upload_chunk', data={'index': '0', 'file': 'notafile'})

    assert response.status_code == 400
    data = response.json()
    assert data['code'] == 'INVALID_CHUNK_REQUEST'
    assert 'file' in data['detail']
    assert registry.file_count() == 0
    assert not staging_dir.exists()


@pytest.mark.parametrize('name', ['..', '/'])
def test_unusable_filename_rejected(client, registry, name):
    response = upload(client, name, '0', b'AAA')

    assert response.status_code == 400
    assert response.json()['code'] == 'INVALID_CHUNK_REQUEST'
    assert registry.file_count() == 0


def test_names_differing_only_in_directory_share_one_file(client, registry):
    first = upload(client, 'a/x.bin', '0', b'FIRST')
    second = upload(client, 'b/x.bin', '0', b'SECOND')

    assert first.json()['file_name'] == 'x.bin'
    assert second.json()['file_name'] == 'x.bin'
    assert registry.get_chunks('a/x.bin') == []
    assert registry.get_chunks('b/x.bin') == []

    chunks = registry.get_chunks('x.bin')
    assert len(chunks) == 2
    for c in chunks:
        assert Path(c.location).read_bytes() == b'SECOND'


def test_get_not_allowed(client):
    response = client.get('/upload_chunk')
    assert response.status_code == 405


def test_storage_failure_returns_500(tmp_path):
    blocker = tmp_path / 'blocker'
    blocker.write_text('not a directory')
    app = create_app(staging_dir=blocker)
    client = TestClient(app)

    response = upload(client, 'report.pdf', '0', b'AAA')

    assert response.status_code == 500
    assert response.json()['code'] == 'CHUNK_STORAGE_FAILED'
    assert app.state.chunk_registry.file_count() == 0

    # server keeps serving after a failure
    assert client.get('/health').status_code == 200


def test_concurrent_uploads_same_file(app, registry):
    total = 20
    errors = []

    def send(index):
        response = upload(TestClient(app), 'video.mp4', str(index), f'chunk-{index}'.encode())
        if response.status_code != 200:
            errors.append(response.status_code)

    threads = [threading.Thread(target=send, args=(i,)) for i in range(total)]

    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    chunks = registry.get_chunks('video.mp4')
    assert sorted(c.index for c in chunks) == list(range(total))
    for c in chunks:
        assert Path(c.location).read_bytes() == f'chunk-{c.index}'.encode()
