"""
Tests for the table of seismic phases.
"""

import pytest

from cmbtomo.exceptions import UnsupportedPhaseError
from cmbtomo.raytheory import (PHASE_TABLE, WaveFamily, WaveType, Interaction,
                               get_phase_spec, validate_phases, 
                               parse_phase_list, base_phase_name, 
                               cmb_interactions)

T = Interaction.TRANSMISSION
TOP = Interaction.REFLECTION_TOP
UNDER = Interaction.REFLECTION_UNDER
P = WaveType.P
S = WaveType.S


class TestPhaseTable:

    @pytest.mark.parametrize('name', ['P', 'PcP', 'PKP', 'PKKP', 'PKKKP', 
                                      'PKKKKP', 'PKKPm', 'PKiKP'])
    def test_p_family(self, name):
        spec = get_phase_spec(name)
        assert spec.family is WaveFamily.P
        assert not spec.outer_core_conversion

    @pytest.mark.parametrize('name', ['S', 'SKS', 'SKKS', 'SKKKS', 'ScS',
                                      'ScSScS', 'ScSScSScS', 'SKKSm', 'Sm'])
    def test_s_family(self, name):
        spec = get_phase_spec(name)
        assert spec.family is WaveFamily.S
        assert spec.outer_core_conversion

    def test_mixed(self):
        pcs = get_phase_spec('PcS')
        assert pcs.family is WaveFamily.MIXED
        assert (pcs.down_wave_type, pcs.up_wave_type) == (P, S)
        scp = get_phase_spec('ScP')
        assert (scp.down_wave_type, scp.up_wave_type) == (S, P)

    @pytest.mark.parametrize('name', ['Pdiff', 'SKIKS', 'sS', '', None])
    def test_unsupported(self, name):
        with pytest.raises(UnsupportedPhaseError) as excinfo:
            get_phase_spec(name)
        assert excinfo.value.phase_name == name

    def test_validate(self):
        specs = validate_phases(['S', 'ScS'])
        assert [spec.name for spec in specs] == ['S', 'ScS']
        with pytest.raises(UnsupportedPhaseError):
            validate_phases(['S', 'ScS', 'PKJKP'])

    def test_table_names(self):
        assert all(spec.name == name for name, spec in PHASE_TABLE.items())


class TestPhaseNames:

    def test_parse_string(self):
        assert parse_phase_list('S, ScS,') == ['S', 'ScS']
        assert parse_phase_list('SKKS') == ['SKKS']

    def test_parse_iterable(self):
        assert parse_phase_list(('S', ' ScS ')) == ['S', 'ScS']

    def test_base_phase_name(self):
        assert base_phase_name('SKKSm') == 'SKKS'
        assert base_phase_name('SKKS') == 'SKKS'
        assert base_phase_name('Sm') == 'S'


class TestCMBInteractions:

    @pytest.mark.parametrize('name, expected', [
        ('S', []),
        ('P', []),
        ('ScS', [(TOP, S, S)]),
        ('PcP', [(TOP, P, P)]),
        ('ScP', [(TOP, S, P)]),
        ('PcS', [(TOP, P, S)]),
        ('SKS', [(T, S, None), (T, S, None)]),
        ('SKKS', [(T, S, None), (UNDER, P, None), (T, S, None)]),
        ('SKKKSm', [(T, S, None), (UNDER, P, None), (UNDER, P, None), 
                    (T, S, None)]),
        ('PKKP', [(T, P, None), (UNDER, P, None), (T, P, None)]),
        ('PKiKP', [(T, P, None), (T, P, None)]),
        ('ScSScS', [(TOP, S, S), (TOP, S, S)]),
    ])
    def test_topology(self, name, expected):
        assert cmb_interactions(name) == expected

    def test_unsupported(self):
        with pytest.raises(UnsupportedPhaseError):
            cmb_interactions('SKIKS')
