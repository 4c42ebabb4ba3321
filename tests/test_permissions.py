import pytest

from payroll_app.utils import Actor, can_view


@pytest.mark.parametrize("actor, target, allowed", [
    (Actor(user_id=1, role="admin", employee_id=None), 5, True),
    (Actor(user_id=1, role="ADMIN", employee_id=None), 5, True),
    (Actor(user_id=2, role="employee", employee_id=5), 5, True),
    (Actor(user_id=2, role="employee", employee_id=5), 6, False),
    (Actor(user_id=3, role="employee", employee_id=None), 5, False),
    (Actor(user_id=4, role="auditor", employee_id=5), 5, False),
    (Actor(user_id=4, role=None, employee_id=5), 5, False),
    (None, 5, False),
])
def test_can_view(actor, target, allowed):
    assert can_view(actor, target) is allowed
