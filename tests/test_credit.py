from domain.constants import ALREADY_CREDITED, SELF_AUTHORED, ELIGIBLE
from domain.models import Deed
from services.credit import decide, affordance


def make(author='bob', is_creditor=False):
    return Deed(id=0, author=author, title='t', description='d', proof='p', is_creditor=is_creditor)


def test_other_viewer_is_eligible():
    assert decide(make(author='bob'), 'alice') == ELIGIBLE


def test_author_cannot_credit_own_deed():
    assert decide(make(author='bob'), 'bob') == SELF_AUTHORED


def test_already_credited_for_non_author():
    assert decide(make(author='bob', is_creditor=True), 'carol') == ALREADY_CREDITED


def test_already_credited_takes_precedence_over_self_authored():
    assert decide(make(author='alice', is_creditor=True), 'alice') == ALREADY_CREDITED


def test_decide_is_deterministic():
    deed = make(author='bob')
    assert {decide(deed, 'alice') for _ in range(5)} == {ELIGIBLE}


def test_affordance_only_enables_eligible():
    enabled, tip = affordance(ELIGIBLE)
    assert enabled and tip == "Give a credit to the deed author."
    assert affordance(SELF_AUTHORED) == (False, "You cannot credit yourself.")
    assert affordance(ALREADY_CREDITED) == (False, "You already credited the author.")
