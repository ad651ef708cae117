"""
Tests for the users app: the aliased /register route and account creation.
"""

from django.contrib.auth.models import User
from django.test import Client, TestCase, override_settings

from routing import path_for

_TEST_STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}


@override_settings(STORAGES=_TEST_STORAGES)
class RegisterViewTest(TestCase):
    """GET and POST /register."""

    def setUp(self):
        self.client = Client()
        self.valid_data = {
            'username': 'reader',
            'email': 'reader@example.com',
            'password1': 'Sturdy-passw0rd!',
            'password2': 'Sturdy-passw0rd!',
        }

    def test_register_alias_path(self):
        self.assertEqual(path_for('register'), '/register')

    def test_form_page(self):
        response = self.client.get(path_for('register'))
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'users/new.html')
        self.assertContains(response, '<h1>Register</h1>', html=True)
        self.assertContains(response, 'action="/register"')

    def test_create_user(self):
        response = self.client.post(path_for('register'), self.valid_data)
        self.assertRedirects(response, path_for('posts'))
        user = User.objects.get(username='reader')
        self.assertEqual(user.email, 'reader@example.com')

    def test_success_message(self):
        with self.assertLogs('users', level='INFO'):
            response = self.client.post(path_for('register'), self.valid_data, follow=True)
        self.assertContains(response, 'Account created!')

    def test_invalid_form_rerendered(self):
        data = dict(self.valid_data, password2='something-else')
        response = self.client.post(path_for('register'), data)
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.context['form'].errors)
        self.assertFalse(User.objects.filter(username='reader').exists())

    def test_email_required(self):
        data = dict(self.valid_data, email='')
        response = self.client.post(path_for('register'), data)
        self.assertIn('email', response.context['form'].errors)

    def test_put_not_allowed(self):
        with self.assertLogs('routing.router', level='WARNING'):
            response = self.client.put(path_for('register'))
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response['Allow'], 'GET, HEAD, POST')
