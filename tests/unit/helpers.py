"""
Shared EBP documents and markup builders for unit tests.
"""


SAMPLE_EBP = """<?xml version="1.0" encoding="utf-8"?>
<project firmware="1.8.2" fileFormatVersion="3" savedAtUtc="2025-05-01T10:00:00Z"
         formatVersion="12" studioVersion="4.1.0">
  <units>
    <unit id="7" serial="A100" name="010-02225-10" unitTypeId="16" standardUnitVariantNumber="2110110">
      <properties>
        <property id="2" value="1" />
      </properties>
      <unitChannelGroups>
        <unitChannelGroup channelGroupId="1">
          <channel number="1" name="Bilge pump" direction="Output"
                   inMainChannelSettingId="57" inChannelSettingId="2"
                   outMainChannelSettingId="48" outChannelSettingId="2" />
          <channel number="2" name="Float switch" direction="Input"
                   inMainChannelSettingId="64" inChannelSettingId="2" />
        </unitChannelGroup>
        <unitChannelGroup channelGroupId="2">
          <channels>
            <channel number="3" name="Wiper" direction="Both"
                     inMainChannelSettingId="54" inChannelSettingId="1"
                     outMainChannelSettingId="55" outChannelSettingId="3" />
          </channels>
        </unitChannelGroup>
      </unitChannelGroups>
    </unit>
    <unit id="3" serial="B200" name="010-02225-10" unitTypeId="101" standardUnitVariantNumber="2110110" />
  </units>
  <schemas>
    <schema id="11" name="Lights" sortIndex="2">
      <components>
        <component componentId="1281" id="c1" componentRevision="1">
          <properties>
            <property id="0" value="1" />
            <property id="1" value="9" />
            <property id="5" value="1" />
          </properties>
        </component>
        <component componentId="1292" id="a1" componentRevision="3">
          <properties>
            <property id="4" value="12" />
            <property id="31" value="High bilge" />
          </properties>
        </component>
        <component componentId="2304" id="m1">
          <properties>
            <property id="0" value="2" />
            <property id="1" value="40" />
          </properties>
        </component>
      </components>
    </schema>
    <schema id="10" name="Tanks" sortIndex="1">
      <components>
        <component componentId="1283" id="c2">
          <properties>
            <property id="0" value="2" />
            <property id="1" value="1" />
            <property id="2" value="0" />
          </properties>
        </component>
        <component componentId="1376" id="c3">
          <properties>
            <property id="0" value="44" />
            <property id="1" value="0" />
          </properties>
        </component>
        <component componentId="9999" id="c4" />
        <component componentId="1292" id="a2" componentRevision="3">
          <properties>
            <property id="4" value="3" />
          </properties>
        </component>
        <component componentId="1292" id="a3">
          <properties>
            <property id="7" value="ignored" />
          </properties>
        </component>
        <component componentId="2304" id="m2">
          <properties>
            <property id="0" value="0" />
            <property id="1" value="5" />
          </properties>
        </component>
      </components>
    </schema>
  </schemas>
</project>
"""


def build_document(units_xml: str = "", schemas_xml: str = "", project_attrs: str = "") -> str:
    """Wrap unit/schema markup into a minimal project document."""
    return (
        f"<project {project_attrs}>"
        f"<units>{units_xml}</units>"
        f"<schemas>{schemas_xml}</schemas>"
        f"</project>"
    )


def component_xml(component_id, properties=None, **attrs) -> str:
    """Markup for a single component with (id, value) properties."""
    attr_text = "".join(f' {k}="{v}"' for k, v in attrs.items())
    props = "".join(f'<property id="{pid}" value="{value}" />' for pid, value in (properties or []))
    return f'<component componentId="{component_id}"{attr_text}><properties>{props}</properties></component>'


