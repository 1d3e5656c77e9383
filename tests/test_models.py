"""Tests for dns_challenge.models."""


def test_txt_record_to_dict():
    from dns_challenge.models import TxtRecord

    record = TxtRecord(name="_acme-challenge", ttl=120, target="token-val")
    assert record.to_dict() == {
        "name": "_acme-challenge",
        "ttl": 120,
        "active": True,
        "target": "token-val",
    }


def test_txt_record_from_dict_ignores_extra_fields():
    from dns_challenge.models import TxtRecord

    record = TxtRecord.from_dict(
        {"name": "_acme-challenge", "ttl": 120, "active": True, "target": "token-val", "comment": "x"}
    )
    assert record == TxtRecord(name="_acme-challenge", ttl=120, target="token-val", active=True)


def test_txt_record_equality_is_field_by_field():
    from dns_challenge.models import TxtRecord

    base = TxtRecord(name="_acme-challenge", ttl=120, target="token-val")
    assert base == TxtRecord(name="_acme-challenge", ttl=120, target="token-val", active=True)
    assert base != TxtRecord(name="_acme-challenge", ttl=60, target="token-val")
    assert base != TxtRecord(name="_acme-challenge", ttl=120, target="token-val", active=False)
    assert base != TxtRecord(name="_acme-challenge", ttl=120, target="other")


def test_ns1_record_to_dict():
    from dns_challenge.models import Ns1Record

    record = Ns1Record(
        zone="example.com",
        domain="_acme-challenge.example.com",
        type="TXT",
        ttl=120,
        answers=(("first",),),
    )
    assert record.to_dict() == {
        "zone": "example.com",
        "domain": "_acme-challenge.example.com",
        "type": "TXT",
        "ttl": 120,
        "answers": [{"answer": ["first"]}],
    }


def test_ns1_record_to_dict_omits_missing_ttl():
    from dns_challenge.models import Ns1Record

    record = Ns1Record(zone="example.com", domain="_acme-challenge.example.com", type="TXT")
    assert "ttl" not in record.to_dict()


def test_ns1_record_from_dict():
    from dns_challenge.models import Ns1Record

    record = Ns1Record.from_dict(
        {
            "id": "5f0c2f",
            "zone": "example.com",
            "domain": "_acme-challenge.example.com",
            "type": "TXT",
            "ttl": 3600,
            "answers": [{"answer": ["first"], "id": "a1"}, {"answer": ["second"]}],
        }
    )
    assert record.ttl == 3600
    assert record.answers == (("first",), ("second",))


def test_ns1_record_with_answer_appends():
    from dns_challenge.models import Ns1Record

    record = Ns1Record(zone="example.com", domain="_acme-challenge.example.com", type="TXT", answers=(("first",),))
    updated = record.with_answer("first")

    assert updated.answers == (("first",), ("first",))
    assert record.answers == (("first",),)
