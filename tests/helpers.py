import datetime
from decimal import Decimal

from accounts.models import Member, School
from charges.models import AppliedServiceCharge, ServiceChargeType
from shares.models import MemberShareCommitment, Share, ShareType
from users.models import User


def make_user(username="admin", role="admin"):
    return User.objects.create_user(username=username, password="s3cret-pass", role=role)


def make_school(name="Bole Primary"):
    return School.objects.create(name=name)


def make_member(school, full_name="Abebe Kebede", join_date=datetime.date(2023, 1, 15),
                expected_monthly_saving=Decimal("100.00"), savings_balance=Decimal("0.00"), **kwargs):
    return Member.objects.create(
        school=school,
        full_name=full_name,
        join_date=join_date,
        expected_monthly_saving=expected_monthly_saving,
        savings_balance=savings_balance,
        **kwargs
    )


def make_share_type(name="Ordinary", value_per_share=Decimal("15.00")):
    return ShareType.objects.create(name=name, value_per_share=value_per_share)


def commit(member, share_type, monthly):
    return MemberShareCommitment.objects.create(
        member=member, share_type=share_type, monthly_committed_amount=monthly
    )


def allocate(member, share_type, count, status="approved", total=None, date=datetime.date(2023, 2, 1)):
    return Share.objects.create(
        member=member,
        member_name=member.full_name,
        share_type=share_type,
        share_type_name=share_type.name,
        count=count,
        value_per_share=share_type.value_per_share,
        total_value_for_allocation=total,
        allocation_date=date,
        status=status,
    )


def make_charge_type(name="Registration fee", amount=Decimal("30.00")):
    return ServiceChargeType.objects.create(name=name, amount=amount)


def charge(member, charge_type, amount, date_applied, status="pending", notes=None):
    return AppliedServiceCharge.objects.create(
        member=member,
        member_name=member.full_name,
        service_charge_type=charge_type,
        service_charge_type_name=charge_type.name,
        amount_charged=amount,
        date_applied=date_applied,
        status=status,
        notes=notes,
    )
