import pytest

from proxmox_balancer.exceptions import ValidationError
from proxmox_balancer.models import ParsedTemplate
from proxmox_balancer.templates import parse_template

def test_parse_and_reserialize():
    name = "ubuntu-18.04-standard_18.04.1-1_amd64.tar.gz"
    template = parse_template(name)

    assert template == ParsedTemplate(
        os="ubuntu",
        os_version="18.04",
        name="standard",
        os_version2="18.04.1-1",
        arch="amd64",
        extension=".tar.gz",
    )
    assert str(template) == name

def test_parse_volume_id():
    template = parse_template("local:vztmpl/debian-10-standard_10.7-1_amd64.tar.gz")

    assert template.os == "debian"
    assert template.os_version2 == "10.7-1"
    assert str(template) == "debian-10-standard_10.7-1_amd64.tar.gz"

@pytest.mark.parametrize("value", ["", "ubuntu.tar.gz", "ubuntu-18.04_amd64.tar.gz"])
def test_rejects_unparseable_names(value):
    with pytest.raises(ValidationError):
        parse_template(value)
