"""
The route table for the whole site.

    GET  /              root      posts#index
    GET  /posts         posts     posts#index
    GET  /posts/:id     post      posts#show
    GET  /register      register  users#new
    POST /register                users#create

Run ``python manage.py routes`` to print the live table.
"""

from posts import views as post_views
from routing.router import Router
from users import views as user_views

router = Router()

router.get('/', post_views.index, as_='root', action='posts#index')
router.resources('posts', post_views, only=['index', 'show'])

# Without as_ this would be named after its path; the alias pins the name
# so templates keep working if the path moves.
router.get('/register', user_views.new, as_='register', action='users#new')
router.post('/register', user_views.create, action='users#create')
