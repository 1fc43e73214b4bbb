"""
Icons Module - Contact platform glyphs
Maps the closed set of icon names stored in contact_info.icon to inline
SVG renderers. Unknown names render the Mail glyph.
"""

from markupsafe import Markup, escape

DEFAULT_ICON = 'Mail'

_SVG_TEMPLATE = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" '
    'viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="{stroke}" '
    'stroke-linecap="round" stroke-linejoin="round" class="icon icon-{slug}" '
    'aria-hidden="true">{body}</svg>'
)


def _glyph(slug, body):
    def render(size=24, stroke=1.5):
        return Markup(_SVG_TEMPLATE.format(size=int(size), stroke=escape(stroke), slug=slug, body=body))
    render.slug = slug
    return render


ICONS = {
    'Github': _glyph('github', (
        '<path d="M15 22v-4a4.8 4.8 0 0 0-1-3.5c3 0 6-2 6-5.5.08-1.25-.27-2.48-1-3.5'
        '.28-1.15.28-2.35 0-3.5 0 0-1 0-3 1.5-2.64-.5-5.36-.5-8 0C6 2 5 2 5 2c-.3 1.15'
        '-.3 2.35 0 3.5A5.403 5.403 0 0 0 4 9c0 3.5 3 5.5 6 5.5-.39.49-.68 1.05-.85 1.65'
        '-.17.6-.22 1.23-.15 1.85v4"/><path d="M9 18c-4.51 2-5-2-7-2"/>')),
    'Linkedin': _glyph('linkedin', (
        '<path d="M16 8a6 6 0 0 1 6 6v7h-4v-7a2 2 0 0 0-2-2 2 2 0 0 0-2 2v7h-4v-7a6 6 0 0 1 6-6z"/>'
        '<rect width="4" height="12" x="2" y="9"/><circle cx="4" cy="4" r="2"/>')),
    'Mail': _glyph('mail', (
        '<rect width="20" height="16" x="2" y="4" rx="2"/>'
        '<path d="m22 7-8.97 5.7a1.94 1.94 0 0 1-2.06 0L2 7"/>')),
    'Instagram': _glyph('instagram', (
        '<rect width="20" height="20" x="2" y="2" rx="5" ry="5"/>'
        '<path d="M16 11.37A4 4 0 1 1 12.63 8 4 4 0 0 1 16 11.37z"/>'
        '<line x1="17.5" x2="17.51" y1="6.5" y2="6.5"/>')),
    'Twitter': _glyph('twitter', (
        '<path d="M22 4s-.7 2.1-2 3.4c1.6 10-9.4 17.3-18 11.6 2.2.1 4.4-.6 6-2C3 15.5.5 9.6 '
        '3 5c2.2 2.6 5.6 4.1 9 4-.9-4.2 4-6.6 7-3.8 1.1 0 3-1.2 3-1.2z"/>')),
    'Phone': _glyph('phone', (
        '<path d="M22 16.92v3a2 2 0 0 1-2.18 2 19.79 19.79 0 0 1-8.63-3.07 19.5 19.5 0 0 1'
        '-6-6 19.79 19.79 0 0 1-3.07-8.67A2 2 0 0 1 4.11 2h3a2 2 0 0 1 2 1.72 12.84 12.84 '
        '0 0 0 .7 2.81 2 2 0 0 1-.45 2.11L8.09 9.91a16 16 0 0 0 6 6l1.27-1.27a2 2 0 0 1 '
        '2.11-.45 12.84 12.84 0 0 0 2.81.7A2 2 0 0 1 22 16.92z"/>')),
    'MessageCircle': _glyph('message-circle', '<path d="M7.9 20A9 9 0 1 0 4 16.1L2 22Z"/>'),
}

ICON_NAMES = tuple(ICONS)


def get_icon(name):
    """Renderer for an icon name, Mail when the name is unknown"""
    return ICONS.get(name) or ICONS[DEFAULT_ICON]


def render_icon(name, size=24, stroke=1.5):
    return get_icon(name)(size=size, stroke=stroke)
