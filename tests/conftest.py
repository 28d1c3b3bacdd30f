"""
Shared fixtures for attribute reader tests.
"""

import pytest

STATES_SCHEMA = """<?xml version="1.0" encoding="UTF-8"?>
<xsd:schema xmlns:gml="http://www.opengis.net/gml" xmlns:topp="http://www.openplans.org/topp"
    xmlns:xsd="http://www.w3.org/2001/XMLSchema" elementFormDefault="qualified"
    targetNamespace="http://www.openplans.org/topp">
  <xsd:import namespace="http://www.opengis.net/gml"
      schemaLocation="http://localhost/geoserver/schemas/gml/3.1.1/base/gml.xsd"/>
  <xsd:complexType name="statesType">
    <xsd:complexContent>
      <xsd:extension base="gml:AbstractFeatureType">
        <xsd:sequence>
          <xsd:element maxOccurs="1" minOccurs="0" name="the_geom" nillable="true" type="gml:MultiSurfacePropertyType"/>
          <xsd:element maxOccurs="1" minOccurs="0" name="STATE_NAME" nillable="true" type="xsd:string"/>
          <xsd:element maxOccurs="1" minOccurs="0" name="STATE_FIPS" nillable="true" type="xsd:string"/>
          <xsd:element maxOccurs="1" minOccurs="0" name="SAMP_POP" nillable="true" type="xsd:double"/>
          <xsd:element maxOccurs="1" minOccurs="1" name="LAND_KM" nillable="false" type="xsd:int"/>
          <xsd:element name="STATUS" minOccurs="0">
            <xsd:simpleType>
              <xsd:restriction base="xsd:string">
                <xsd:enumeration value="active"/>
                <xsd:enumeration value="retired"/>
                <xsd:maxLength value="10"/>
              </xsd:restriction>
            </xsd:simpleType>
          </xsd:element>
        </xsd:sequence>
      </xsd:extension>
    </xsd:complexContent>
  </xsd:complexType>
  <xsd:element name="states" substitutionGroup="gml:_Feature" type="topp:statesType"/>
</xsd:schema>
"""

TWO_TYPES_SCHEMA = """<?xml version="1.0" encoding="UTF-8"?>
<xsd:schema xmlns:xsd="http://www.w3.org/2001/XMLSchema" xmlns:ns="urn:example"
    targetNamespace="urn:example">
  <xsd:complexType name="roadsType">
    <xsd:sequence>
      <xsd:element name="label" type="xsd:string"/>
    </xsd:sequence>
  </xsd:complexType>
  <xsd:complexType name="riversType">
    <xsd:sequence>
      <xsd:element name="flow" type="xsd:double"/>
      <xsd:element name="depth" type="xsd:double"/>
    </xsd:sequence>
  </xsd:complexType>
  <xsd:element name="roads" type="ns:roadsType"/>
  <xsd:element name="rivers" type="ns:riversType"/>
</xsd:schema>
"""

EMPTY_SCHEMA = """<xsd:schema xmlns:xsd="http://www.w3.org/2001/XMLSchema" targetNamespace="urn:empty"/>"""


@pytest.fixture
def states_schema():
    """DescribeFeatureType response with a single feature type."""
    return STATES_SCHEMA


@pytest.fixture
def two_types_schema():
    """DescribeFeatureType response with two feature types."""
    return TWO_TYPES_SCHEMA


@pytest.fixture
def empty_schema():
    """DescribeFeatureType response without feature types."""
    return EMPTY_SCHEMA


@pytest.fixture
def states_file(tmp_path, states_schema):
    """States schema written to disk."""
    path = tmp_path / "states.xsd"
    path.write_text(states_schema, encoding="utf-8")
    return path
