from boxdialog.results import DialogResult, DialogReturnValue, FormData


def test_form_data_is_a_read_only_mapping():
    data = FormData({"Name": "Ann", "City": "Oslo"})
    assert data["Name"] == "Ann"
    assert list(data) == ["Name", "City"]
    assert len(data) == 2
    assert dict(data) == data.to_dict()
    assert not hasattr(data, "__setitem__")


def test_return_value_defaults_and_quit():
    assert DialogReturnValue() == DialogReturnValue(False, None, FormData())

    rv = DialogReturnValue.quit(DialogResult.RETRY, FormData({"a": "b"}))
    assert rv.should_quit is True
    assert rv.dialog_result is DialogResult.RETRY
    assert rv.form_data.to_dict() == {"a": "b"}
