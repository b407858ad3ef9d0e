from vimcanvas.font_options import (
    DEFAULT_FONT_SIZE,
    FontEdging,
    FontHinting,
    FontOptions,
    points_to_pixels,
)


def test_parse_one_font_from_guifont_setting():
    font_options = FontOptions.parse("Fira Code Mono")
    assert len(font_options.font_list) == 1


def test_parse_many_fonts_from_guifont_setting():
    font_options = FontOptions.parse("Fira Code Mono,Console")
    assert len(font_options.font_list) == 2


def test_parse_edging_from_guifont_setting():
    font_options = FontOptions.parse("Fira Code Mono:#e-subpixelantialias")
    assert font_options.edging == FontEdging.SUBPIXEL_ANTI_ALIAS


def test_parse_hinting_from_guifont_setting():
    font_options = FontOptions.parse("Fira Code Mono:#h-slight")
    assert font_options.hinting == FontHinting.SLIGHT


def test_parse_font_size_float_from_guifont_setting():
    font_options = FontOptions.parse("Fira Code Mono:h15.5")
    assert font_options.size == points_to_pixels(15.5)
    assert font_options.allow_float_size is True


def test_parse_all_params_together_from_guifont_setting():
    font_options = FontOptions.parse("Fira Code Mono:h15:b:i:#h-slight:#e-alias")
    assert font_options.size == points_to_pixels(15.0)
    assert font_options.bold is True
    assert font_options.italic is True
    assert font_options.edging == FontEdging.ALIAS
    assert font_options.hinting == FontHinting.SLIGHT
    assert font_options.allow_float_size is False


def test_underscores_become_spaces_and_empty_names_dropped():
    font_options = FontOptions.parse("Fira_Code,,Console")
    assert font_options.font_list == ["Fira Code", "Console"]
    assert font_options.primary_font() == "Fira Code"


def test_empty_setting_gives_defaults():
    font_options = FontOptions.parse("")
    assert font_options == FontOptions()
    assert font_options.primary_font() is None
    assert font_options.size == points_to_pixels(DEFAULT_FONT_SIZE)
    assert font_options.hinting == FontHinting.FULL
    assert font_options.edging == FontEdging.ANTI_ALIAS


def test_invalid_size_keeps_default():
    font_options = FontOptions.parse("Mono:habc")
    assert font_options.size == points_to_pixels(DEFAULT_FONT_SIZE)


def test_enum_parse_fallbacks():
    assert FontEdging.parse("antialias") == FontEdging.ANTI_ALIAS
    assert FontEdging.parse("whatever") == FontEdging.ALIAS
    assert FontHinting.parse("full") == FontHinting.FULL
    assert FontHinting.parse("normal") == FontHinting.NORMAL
    assert FontHinting.parse("bogus") == FontHinting.NONE


def test_equality_ignores_allow_float_size():
    a = FontOptions.parse("Mono:h15")
    b = FontOptions.parse("Mono:h15.0")
    assert a.allow_float_size != b.allow_float_size
    assert a == b
    assert a != FontOptions.parse("Mono:h16")