"""Regular English inflection for resource names (posts <-> post)."""

_SIBILANT_ENDINGS = ('ses', 'xes', 'zes', 'ches', 'shes')


def singularize(word):
    """Return the singular of a regular plural noun."""
    if word.endswith('ies') and len(word) > 3:
        return word[:-3] + 'y'
    if word.endswith(_SIBILANT_ENDINGS):
        return word[:-2]
    if word.endswith('s') and not word.endswith('ss'):
        return word[:-1]
    return word


def pluralize(word):
    """Return the plural of a regular singular noun."""
    if word.endswith('y') and len(word) > 1 and word[-2] not in 'aeiou':
        return word[:-1] + 'ies'
    if word.endswith(('s', 'x', 'z', 'ch', 'sh')):
        return word + 'es'
    return word + 's'
