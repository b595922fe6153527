from app.services.state_machine import decide_match_status


def test_single_yes_keeps_match_pending():
    assert decide_match_status(["yes", None]) == "Pending"
    assert decide_match_status([None, None]) == "Pending"
    assert decide_match_status([]) == "Pending"


def test_two_yes_confirms():
    assert decide_match_status(["yes", "yes"]) == "Confirmed"
    assert decide_match_status(["YES", "Yes"]) == "Confirmed"


def test_no_vetoes_regardless_of_order():
    assert decide_match_status(["yes", "no"]) == "Cancelled"
    assert decide_match_status(["no", "yes"]) == "Cancelled"
    assert decide_match_status(["no", None]) == "Cancelled"
    assert decide_match_status(["yes", "yes", "no"]) == "Cancelled"
