"""
Registration views.

These sit behind the aliased route ``register``:

    GET  /register  -> new     (the sign-up form)
    POST /register  -> create  (save the account)
"""

import logging

from django.contrib import messages
from django.shortcuts import redirect, render

from routing import path_for

from .forms import RegistrationForm

logger = logging.getLogger(__name__)


def new(request):
    """Show an empty registration form."""
    return render(request, 'users/new.html', {'form': RegistrationForm()})


def create(request):
    """Create the account, or re-show the form with its errors."""
    form = RegistrationForm(request.POST)
    if form.is_valid():
        user = form.save()
        logger.info('Registered user %s', user.username)
        messages.success(request, 'Account created!')
        return redirect(path_for('posts'))
    return render(request, 'users/new.html', {'form': form})
