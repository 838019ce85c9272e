import json

from main import main

from conftest import make_pdf


def test_json_output_masks_ids(tmp_path, capsys, letter_lines, aadhaar_id):
    (tmp_path / "aadhaar.pdf").write_bytes(make_pdf(letter_lines))
    (tmp_path / "notes.txt").write_text("ignored")

    code = main([str(tmp_path), "--json", "--no-prompt"])

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert len(payload) == 1
    assert payload[0]["success"] is True
    assert payload[0]["data"]["aadhar"] == "XXXX XXXX " + aadhaar_id[-4:]
    assert payload[0]["file"].endswith("aadhaar.pdf")


def test_failures_set_exit_code(tmp_path, capsys):
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"not a pdf")

    code = main([str(path), "--json", "--no-prompt"])

    payload = json.loads(capsys.readouterr().out)
    assert code == 1
    assert payload[0]["success"] is False


def test_no_inputs_found(tmp_path):
    assert main([str(tmp_path), "--no-prompt"]) == 2
