from csvprint.render import (
    build_print_set,
    filter_rows,
    parse_row_filter,
    record_title,
    render_print_set,
    resolve_column_indices,
)


def test_column_indices_follow_file_order():
    headers = ["A", "B", "C", "D"]
    assert resolve_column_indices(headers, ["D", "A", "C"]) == [0, 2, 3]


def test_column_indices_include_every_duplicate_header():
    assert resolve_column_indices(["a", "b", "a"], {"a"}) == [0, 2]


def test_row_filter_drops_out_of_range_duplicates_and_junk():
    assert parse_row_filter("2,10,2,abc", 5) == {2}


def test_row_filter_accepts_newlines_and_spaces():
    assert parse_row_filter(" 1\n3\r\n5 ,0,-1", 5) == {1, 3, 5}


def test_empty_row_filter_means_no_filter():
    rows = [["a"], ["b"], ["c"]]
    assert parse_row_filter("", 3) == set()
    assert parse_row_filter(None, 3) == set()
    assert filter_rows(rows, set()) == [(1, ["a"]), (2, ["b"]), (3, ["c"])]


def test_filter_rows_keeps_original_order_and_positions():
    rows = [["a"], ["b"], ["c"], ["d"]]
    assert filter_rows(rows, {4, 2}) == [(2, ["b"]), (4, ["d"])]


def test_title_name_and_company():
    assert record_title(["Full Name", "Employer"], ["Ada", "Acme"], 1) == "Ada - Acme"
    assert record_title(["Full Name", "Company"], ["Ada", "Acme"], 1) == "Ada - Acme"
    assert record_title(["Applicant", "Organization"], ["Ada", "Acme"], 1) == "Ada - Acme"


def test_title_name_only():
    assert record_title(["Full Name"], ["Ada"], 1) == "Ada"


def test_title_fallback_uses_position():
    assert record_title(["X"], [""], 3) == "Application 3"


def test_title_company_without_name_falls_back():
    assert record_title(["Name", "Company"], ["", "Acme"], 2) == "Application 2"


def test_title_uses_first_matching_header_case_insensitively():
    headers = ["ID", "FIRST NAME", "Last Name"]
    assert record_title(headers, ["7", "Ada", "Lovelace"], 1) == "Ada"


def test_title_short_row_does_not_raise():
    assert record_title(["id", "Name", "Company"], ["1"], 4) == "Application 4"


def test_short_row_renders_missing_cell_as_empty():
    document = render_print_set(["A", "B", "C"], [["x"]], {"C"})
    assert '<div class="field-label">C:</div><div class="field-value"></div>' in document


def test_cell_content_is_escaped():
    document = render_print_set(["Name", "Note"], [["Ada", "<script>alert('x')</script>"]], {"Note"})
    assert "<script>" not in document
    assert "&lt;script&gt;alert(&#x27;x&#x27;)&lt;/script&gt;" in document


def test_headers_and_titles_are_escaped():
    document = render_print_set(['Name "&"'], [["A & B"]], {'Name "&"'})
    assert "<h1>A &amp; B</h1>" in document
    assert "Name &quot;&amp;&quot;:" in document


def test_document_has_one_section_per_retained_row():
    headers = ["Name", "Age"]
    rows = [["Ada", "36"], ["Grace", "85"], ["Alan", "41"]]

    document = render_print_set(headers, rows, {"Name", "Age"})
    assert document.startswith("<!DOCTYPE html>")
    assert document.count('<div class="application">') == 3
    assert "page-break-after: always" in document

    filtered = render_print_set(headers, rows, {"Name", "Age"}, "3")
    assert filtered.count('<div class="application">') == 1
    assert "<h1>Alan</h1>" in filtered


def test_unselected_columns_are_left_out():
    document = render_print_set(["Name", "Secret"], [["Ada", "hunter2"]], {"Name"})
    assert "Secret" not in document
    assert "hunter2" not in document


def test_column_order_after_toggle_off_and_on():
    headers = ["A", "B", "C"]
    rows = [["1", "2", "3"]]
    before = render_print_set(headers, rows, {"A", "B", "C"})

    selected = {"A", "B", "C"}
    selected.discard("A")
    selected.add("A")
    assert render_print_set(headers, rows, selected) == before
    assert before.index("A:") < before.index("B:") < before.index("C:")


def test_build_print_set_reports_nothing_to_print():
    no_rows = build_print_set(["A"], [], {"A"})
    assert not no_rows.ok
    assert no_rows.reason == "no data rows"

    no_columns = build_print_set(["A"], [["1"]], set())
    assert not no_columns.ok
    assert no_columns.reason == "no columns selected"
    assert no_columns.document == ""


def test_build_print_set_counts_records():
    result = build_print_set(["A"], [["1"], ["2"], ["3"]], {"A"}, "1,3", title="Batch")
    assert result.ok
    assert result.records == 2
    assert "<title>Batch</title>" in result.document
