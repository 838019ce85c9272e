from aadhaar_extractor.models import TextFragment
from aadhaar_extractor.processors import (
    LayoutReconstructor,
    PDFTextExtractor,
    ProcessingContext,
    group_lines,
    normalize_digit_runs,
    reconstruct_page,
)

from conftest import make_pdf


def frag(text, x, y):
    return TextFragment(text=text, x=x, y=y)


def test_fragments_group_into_lines_top_first():
    fragments = [
        frag("MALE", 50, 680),
        frag("15/08/1995", 150, 702),
        frag("DOB:", 100, 700),
    ]
    lines = group_lines(fragments)
    assert [[f.text for f in line] for line in lines] == [["DOB:", "15/08/1995"], ["MALE"]]


def test_line_threshold_is_respected():
    fragments = [frag("a", 10, 700), frag("b", 20, 691)]
    assert len(group_lines(fragments, line_threshold=8.0)) == 2
    assert len(group_lines(fragments, line_threshold=10.0)) == 1


def test_empty_page():
    assert group_lines([]) == []
    assert reconstruct_page([]) == ""


def test_split_id_groups_are_rejoined():
    fragments = [frag("2345", 100, 300), frag("6789", 140, 300), frag("0123", 180, 300)]
    assert reconstruct_page(fragments) == "2345 6789 0123"


def test_normalize_digit_runs():
    assert normalize_digit_runs("2345   6789\t0123") == "2345 6789 0123"
    assert normalize_digit_runs("234567890123") == "2345 6789 0123"
    assert normalize_digit_runs("1  2  3") == "1 2 3"
    assert normalize_digit_runs("2345\n6789\n0123") == "2345\n6789\n0123"
    assert normalize_digit_runs("DOB: 15/08/1995") == "DOB: 15/08/1995"


def test_columns_in_a_real_pdf_are_merged(config):
    data = make_pdf(
        ["Unique Identification Authority of India"],
        columns=[(72, 230, "MALE"), (72, 200, "DOB:"), (300, 200, "15/08/1995")],
    )
    context = ProcessingContext(config=config, data=data)

    assert PDFTextExtractor(context).run()
    assert LayoutReconstructor(context).run()

    assert context.page_count == 1
    assert context.text.splitlines() == [
        "Unique Identification Authority of India",
        "DOB: 15/08/1995",
        "MALE",
    ]
    (page,) = context.pages
    assert page.line_count == 3
    assert page.fragment_count >= 3


def test_processor_matches_page_function(config):
    fragments = [frag("2345", 100, 300), frag("To", 50, 320), frag("6789  0123", 140, 301)]
    context = ProcessingContext(config=config, page_fragments=[fragments])

    assert LayoutReconstructor(context).run()
    assert context.text == reconstruct_page(fragments) == "To\n2345 6789 0123"
