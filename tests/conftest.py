import matplotlib

matplotlib.use("Agg")

import pytest

HEADER = "Date,Name,Age,Sex,Race,Number / Race / Sex of Victims,State,Region,Method,Juvenile,Federal,Volunteer,Foreign National,County\n"

ROWS = [
    "01/10/1986,A,30,Male,White,1 White Male,TX,South,Lethal Injection,No,No,No,No,Harris",
    "03/15/2005,B,41,Male,Black,1 White Female,TX,South,Lethal Injection,No,No,No,No,Dallas",
    "06/01/2005,C,38,Female,White,1 White Male,OK,South,Lethal Injection,No,No,No,No,Tulsa",
    "09/20/2001,D,55,Male,Latinx,2 Latinx Male,VA,South,Electrocution,No,No,Yes,No,Fairfax",
    "12/31/1999,E,44,Male,White,1 White Male,FL,South,Electrocution,No,No,No,No,Duval",
    "02/02/2000,F,29,Male,White,1 White Female,MO,Midwest,Lethal Injection,No,No,No,No,St. Louis",
]


def write_csv(path, rows, header=HEADER):
    path.write_text(header + "\n".join(rows) + "\n", encoding="utf-8")
    return str(path)


@pytest.fixture
def sample_csv(tmp_path):
    return write_csv(tmp_path / "execution_database.csv", ROWS)


@pytest.fixture
def empty_csv(tmp_path):
    return write_csv(tmp_path / "old_only.csv", [ROWS[0], ROWS[4]])
