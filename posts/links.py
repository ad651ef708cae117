"""Link rendering for lists of records."""

from collections import namedtuple

from routing import path_for

ResourceLink = namedtuple('ResourceLink', ['text', 'href'])


def resource_links(records, route='post', router=None):
    """
    Yield a ResourceLink(text, href) per record, lazily.

    ``href`` is the reverse lookup of ``route`` for the record and ``text``
    is its title. Pass ``router`` to reverse against a router other than the
    project one.
    """
    reverse = router.path_for if router is not None else path_for
    for record in records:
        yield ResourceLink(record.title, reverse(route, record))
