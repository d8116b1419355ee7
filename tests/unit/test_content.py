# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

import unittest
from datetime import datetime, timedelta, timezone

from attestation.core.models import ReasonCode
from attestation.render.content import (
    format_content,
    format_date,
    format_time,
    full_address,
    full_name,
    local_exit,
    suggested_filename,
)
from tests.test_support import TEST_GENERATED_AT, make_test_request


class TestCanonicalContent(unittest.TestCase):
    def test_full_content_layout(self) -> None:
        request = make_test_request()
        content = format_content(request, TEST_GENERATED_AT)
        self.assertEqual(
            content,
            "Cree le: 05/04/2021 a 14h02;\n"
            " Nom: Dupont;\n"
            " Prenom: Jean;\n"
            " Naissance: 01/01/1970 a Lyon;\n"
            " Adresse: 1 rue de Rivoli 75001 Paris;\n"
            " Sortie: 05/04/2021 a 14:30;\n"
            " Motifs: travail, sante",
        )

    def test_reasons_follow_declaration_order(self) -> None:
        cases = (
            ((ReasonCode.HEALTH, ReasonCode.WORK), "travail, sante"),
            ((ReasonCode.WORK, ReasonCode.HEALTH), "travail, sante"),
            (
                (ReasonCode.CHILDREN, ReasonCode.SHOPPING, ReasonCode.MISSIONS),
                "achats, missions, enfants",
            ),
            ((ReasonCode.SPORT_ANIMALS,), "sport_animaux"),
        )
        for reasons, expected in cases:
            with self.subTest(reasons=reasons):
                content = format_content(make_test_request(reasons=reasons), TEST_GENERATED_AT)
                self.assertTrue(content.endswith(f"Motifs: {expected}"))

    def test_every_selected_code_appears_once(self) -> None:
        request = make_test_request(reasons=list(ReasonCode))
        motifs = format_content(request, TEST_GENERATED_AT).rsplit("Motifs: ", 1)[1]
        tokens = motifs.split(", ")
        self.assertEqual(tokens, [reason.code for reason in ReasonCode])

    def test_generation_stamp_changes_content(self) -> None:
        request = make_test_request()
        first = format_content(request, TEST_GENERATED_AT)
        second = format_content(request, TEST_GENERATED_AT + timedelta(minutes=1))
        self.assertNotEqual(first, second)
        self.assertEqual(first, format_content(request, TEST_GENERATED_AT))


class TestFormatting(unittest.TestCase):
    def test_exit_uses_its_own_offset(self) -> None:
        cases = (
            ("2021-04-05T14:30+02:00", "05/04/2021", "14:30"),
            ("2021-04-05T23:30-05:00", "05/04/2021", "23:30"),
            ("2021-12-31T00:05+00:00", "31/12/2021", "00:05"),
        )
        for raw, expected_date, expected_time in cases:
            with self.subTest(raw=raw):
                request = make_test_request(exit_datetime=datetime.fromisoformat(raw))
                exit_at = local_exit(request)
                self.assertEqual(format_date(exit_at), expected_date)
                self.assertEqual(format_time(exit_at), expected_time)

    def test_local_exit_is_not_converted(self) -> None:
        exit_at = datetime(2021, 4, 5, 1, 0, tzinfo=timezone(timedelta(hours=9)))
        request = make_test_request(exit_datetime=exit_at)
        self.assertEqual(local_exit(request), datetime(2021, 4, 5, 1, 0))

    def test_names_and_address(self) -> None:
        request = make_test_request(first_name="Anne", last_name="Martin")
        self.assertEqual(full_name(request), "Anne Martin")
        self.assertEqual(full_address(request), "1 rue de Rivoli 75001 Paris")

    def test_suggested_filename(self) -> None:
        self.assertEqual(
            suggested_filename(datetime(2021, 4, 5, 9, 7)),
            "attestation-2021-04-05_09-07.pdf",
        )


if __name__ == "__main__":
    unittest.main()
