import pytest

from iis_geolocate.classify import AddressClass, classify_address


@pytest.mark.parametrize(
    "address, expected",
    [
        ("8.8.8.8", AddressClass.ROUTABLE),
        ("10.1.2.3", AddressClass.PRIVATE),
        ("192.168.1.5", AddressClass.PRIVATE),
        ("192.169.1.5", AddressClass.ROUTABLE),
        ("172.16.0.1", AddressClass.PRIVATE),
        ("172.31.255.255", AddressClass.PRIVATE),
        ("172.15.0.1", AddressClass.ROUTABLE),
        ("172.32.0.1", AddressClass.ROUTABLE),
        ("224.0.0.1", AddressClass.MULTICAST),
        ("255.255.255.255", AddressClass.MULTICAST),
        ("223.255.0.1", AddressClass.ROUTABLE),
        ("fe80::1ff:fe23:4567:890a", AddressClass.LINK_LOCAL),
        ("FE80::1", AddressClass.LINK_LOCAL),
        ("2001:4860:4860::8888", AddressClass.ROUTABLE),
    ],
)
def test_classify_address(address, expected):
    assert classify_address(address) is expected


@pytest.mark.parametrize(
    "address",
    ["", "-", "bogus", "a.b.c.d", "10", "::ffff:10.0.0.1", "1_0.0.0.1", "+10.0.0.1", " 10.0.0.1"],
)
def test_unparseable_addresses_are_left_to_the_lookup(address):
    assert classify_address(address) is AddressClass.ROUTABLE


def test_only_routable_is_not_excluded():
    assert not AddressClass.ROUTABLE.excluded
    assert all(cls.excluded for cls in AddressClass if cls is not AddressClass.ROUTABLE)
