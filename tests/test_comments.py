from novel_extras.models.chapter import Chapter
from novel_extras.models.comment import Comment
from novel_extras.models.mention import Mention
from novel_extras.models.user import User
from tests.conftest import post_json


def _send(client, token, content, relative_path='/ch1'):
    return post_json(client, '/comment/send', {
        'token': token, 'relative_path': relative_path, 'content': content,
    })


def _chapter_comments(client, relative_path='/ch1'):
    resp = client.get('/comment/getChapter', query_string={'relative_path': relative_path})
    assert resp.status_code == 200
    return resp.get_json()


class TestSend:
    """POST /comment/send"""

    def test_send_comment(self, client, register):
        token = register('Alice')
        resp = _send(client, token, 'Great chapter')
        assert resp.status_code == 200
        assert resp.get_json() == {'success': True}

        comments = _chapter_comments(client)
        assert len(comments) == 1
        assert comments[0]['body'] == 'Great chapter'
        assert comments[0]['relative_path'] == '/ch1'
        assert comments[0]['user']['user_name'] == 'alice'
        assert comments[0]['user']['display_name'] == 'Alice'
        assert comments[0]['user']['avatar_url'].startswith('https://ui-avatars.com/api/Alice/128/')

    def test_send_creates_chapter_without_visit(self, client, register):
        token = register('Alice')
        _send(client, token, 'First!', relative_path='/brand-new')
        chapter = Chapter.query.filter_by(relative_path='/brand-new').one()
        assert chapter.visit_count == 0

    def test_content_at_limit_succeeds(self, client, register):
        token = register('Alice')
        resp = _send(client, token, 'x' * 4096)
        assert resp.get_json() == {'success': True}

    def test_content_over_limit_fails(self, client, register):
        token = register('Alice')
        resp = _send(client, token, 'x' * 4097)
        assert resp.get_json() == {'success': False, 'code': 6}
        assert Comment.query.count() == 0

    def test_empty_content_fails(self, client, register):
        token = register('Alice')
        resp = _send(client, token, '')
        assert resp.get_json() == {'success': False, 'code': 9}

    def test_malformed_token_is_forbidden(self, client):
        resp = _send(client, 'nope', 'hello')
        assert resp.status_code == 403

    def test_unknown_token_is_forbidden(self, client):
        resp = _send(client, 'Q' * 32, 'hello')
        assert resp.status_code == 403
        assert Chapter.query.count() == 0

    def test_invalid_path_is_forbidden(self, client, register):
        token = register('Alice')
        resp = _send(client, token, 'hello', relative_path='')
        assert resp.status_code == 403

    def test_missing_field_returns_400(self, client, register):
        token = register('Alice')
        resp = post_json(client, '/comment/send', {'token': token, 'content': 'hi'})
        assert resp.status_code == 400


class TestMentions:

    def test_mention_creates_row(self, client, register):
        register('Alice')
        bob = register('Bob')
        _send(client, bob, 'hi @alice')

        alice = User.query.filter_by(user_name='alice').one()
        mention = Mention.query.one()
        assert mention.mentioned_user_id == alice.id

    def test_unknown_names_are_skipped(self, client, register):
        register('Alice')
        bob = register('Bob')
        resp = _send(client, bob, '@ghost @alice')
        assert resp.get_json() == {'success': True}
        assert Mention.query.count() == 1

    def test_at_most_five_mentions(self, client, register):
        names = ['user_a', 'user_b', 'user_c', 'user_d', 'user_e', 'user_f', 'user_g']
        for name in names:
            register(name)
        poster = register('Poster')

        _send(client, poster, ' '.join(f'@{name}' for name in names))

        mentioned = {
            User.query.get(m.mentioned_user_id).user_name for m in Mention.query.all()
        }
        assert mentioned == set(names[:5])

    def test_repeated_mention_counts_toward_cap(self, client, register):
        register('Alice')
        register('Carol')
        poster = register('Poster')

        _send(client, poster, '@alice ' * 5 + '@carol')

        assert [m.mentioned_user_id for m in Mention.query.all()] == [
            User.query.filter_by(user_name='alice').one().id,
        ]

    def test_mention_with_self(self, client, register):
        alice = register('Alice')
        _send(client, alice, 'note to @alice')
        assert Mention.query.count() == 1


class TestGetChapter:
    """GET /comment/getChapter"""

    def test_newest_first(self, client, register):
        token = register('Alice')
        _send(client, token, 'one')
        _send(client, token, 'two')
        _send(client, token, 'elsewhere', relative_path='/ch2')

        assert [c['body'] for c in _chapter_comments(client)] == ['two', 'one']

    def test_unknown_chapter_is_empty(self, client):
        assert _chapter_comments(client, '/nothing-here') == []

    def test_invalid_path_is_forbidden(self, client):
        resp = client.get('/comment/getChapter', query_string={'relative_path': ''})
        assert resp.status_code == 403

    def test_avatar_uses_gravatar_with_email(self, client, register):
        token = register('Alice', email='alice@example.com')
        _send(client, token, 'hello')
        avatar = _chapter_comments(client)[0]['user']['avatar_url']
        assert avatar.startswith('https://www.gravatar.com/avatar/')


class TestGetRecent:
    """GET /comment/getRecent"""

    def test_global_feed_capped_at_fifty(self, client, register):
        token = register('Alice')
        for i in range(55):
            _send(client, token, f'comment {i}', relative_path=f'/ch{i % 3}')

        resp = client.get('/comment/getRecent')
        comments = resp.get_json()
        assert len(comments) == 50
        assert comments[0]['body'] == 'comment 54'
        assert comments[-1]['body'] == 'comment 5'


class TestDelete:
    """POST /comment/delete"""

    def test_delete_twice(self, client, register):
        token = register('Alice')
        _send(client, token, 'oops')
        comment_id = _chapter_comments(client)[0]['id']

        resp = post_json(client, '/comment/delete', {'comment_id': comment_id, 'token': token})
        assert resp.get_json() == {'success': True}
        assert _chapter_comments(client) == []

        resp = post_json(client, '/comment/delete', {'comment_id': comment_id, 'token': token})
        assert resp.status_code == 403

    def test_soft_delete_keeps_row(self, client, register):
        token = register('Alice')
        _send(client, token, 'oops')
        comment_id = _chapter_comments(client)[0]['id']
        post_json(client, '/comment/delete', {'comment_id': comment_id, 'token': token})

        assert Comment.query.get(comment_id).deleted is True

    def test_cannot_delete_someone_elses_comment(self, client, register):
        alice = register('Alice')
        bob = register('Bob')
        _send(client, alice, 'mine')
        comment_id = _chapter_comments(client)[0]['id']

        resp = post_json(client, '/comment/delete', {'comment_id': comment_id, 'token': bob})
        assert resp.status_code == 403
        assert len(_chapter_comments(client)) == 1

    def test_unknown_token_is_forbidden(self, client, register):
        token = register('Alice')
        _send(client, token, 'mine')
        comment_id = _chapter_comments(client)[0]['id']

        resp = post_json(client, '/comment/delete', {'comment_id': comment_id, 'token': 'N' * 32})
        assert resp.status_code == 403

    def test_malformed_token_is_forbidden(self, client):
        resp = post_json(client, '/comment/delete', {'comment_id': 1, 'token': 'bad'})
        assert resp.status_code == 403


class TestMentionFeed:
    """POST /comment/getRecentMentioned and the init mention counter."""

    def test_end_to_end_mentions(self, client, register):
        alice = register('Alice')
        bob = register('Bob')
        _send(client, bob, 'Look at this @Alice', relative_path='/ch1')

        resp = post_json(client, '/user/init', {'token': alice})
        assert resp.get_json()['mentions'] == 1

        resp = post_json(client, '/comment/getRecentMentioned', {'token': alice})
        mentioned = resp.get_json()
        assert [c['body'] for c in mentioned] == ['Look at this @Alice']
        assert mentioned[0]['user']['user_name'] == 'bob'

        resp = post_json(client, '/user/init', {'token': alice})
        assert resp.get_json()['mentions'] == 0

    def test_reading_feed_resets_unseen_count(self, client, register):
        alice = register('Alice')
        bob = register('Bob')
        _send(client, bob, '@alice one')
        _send(client, bob, '@alice two')

        post_json(client, '/comment/getRecentMentioned', {'token': alice})
        _send(client, bob, '@alice three')

        resp = post_json(client, '/user/init', {'token': alice})
        assert resp.get_json()['mentions'] == 1

    def test_deleted_comment_mentions_are_hidden(self, client, register):
        alice = register('Alice')
        bob = register('Bob')
        _send(client, bob, '@alice gone soon')
        comment_id = _chapter_comments(client)[0]['id']
        post_json(client, '/comment/delete', {'comment_id': comment_id, 'token': bob})

        resp = post_json(client, '/user/init', {'token': alice})
        assert resp.get_json()['mentions'] == 0
        resp = post_json(client, '/comment/getRecentMentioned', {'token': alice})
        assert resp.get_json() == []

    def test_malformed_token_is_forbidden(self, client):
        resp = post_json(client, '/comment/getRecentMentioned', {'token': 'x'})
        assert resp.status_code == 403

    def test_unknown_token_gets_empty_list(self, client):
        resp = post_json(client, '/comment/getRecentMentioned', {'token': 'M' * 32})
        assert resp.status_code == 200
        assert resp.get_json() == []
