from markupsafe import Markup

from utils.icons import DEFAULT_ICON, ICON_NAMES, get_icon, render_icon


def test_every_known_icon_renders_its_own_glyph():
    for name in ICON_NAMES:
        svg = render_icon(name)
        assert isinstance(svg, Markup)
        assert f'icon-{get_icon(name).slug}' in svg


def test_unknown_names_fall_back_to_mail():
    mail = render_icon(DEFAULT_ICON)
    assert render_icon('Facebook') == mail
    assert render_icon('') == mail
    assert render_icon(None) == mail


def test_size_is_applied():
    assert 'width="18"' in render_icon('Github', size=18)


def test_footer_uses_icons(client, insert_rows):
    insert_rows('contact_info', {'platform': 'github', 'label': 'GitHub', 'url': 'https://github.com/jo',
                                 'icon': 'Github'})
    body = client.get('/about').get_data(as_text=True)
    assert 'aria-label="GitHub"' in body
    assert 'icon-github' in body
