"""
NCAA Division Reference Data

Static college baseball programs by division, used by the school matching
cache. Searched in DIVISION_ORDER; within a division, list order is the
tie-break when more than one entry matches.
"""

from typing import Dict, List


DIVISION_ORDER = ("D1", "D2", "D3")

DIVISION_SCHOOLS: Dict[str, List[Dict[str, str]]] = {
    "D1": [
        {"name": "Florida State University", "conference": "ACC"},
        {"name": "University of Florida", "conference": "SEC"},
        {"name": "University of Miami", "conference": "ACC"},
        {"name": "Clemson University", "conference": "ACC"},
        {"name": "Wake Forest University", "conference": "ACC"},
        {"name": "University of North Carolina at Chapel Hill", "conference": "ACC"},
        {"name": "North Carolina State University", "conference": "ACC"},
        {"name": "Duke University", "conference": "ACC"},
        {"name": "University of Virginia", "conference": "ACC"},
        {"name": "Georgia Institute of Technology", "conference": "ACC"},
        {"name": "University of Louisville", "conference": "ACC"},
        {"name": "Stanford University", "conference": "ACC"},
        {"name": "Vanderbilt University", "conference": "SEC"},
        {"name": "Louisiana State University", "conference": "SEC"},
        {"name": "University of Georgia", "conference": "SEC"},
        {"name": "University of Alabama", "conference": "SEC"},
        {"name": "Auburn University", "conference": "SEC"},
        {"name": "University of Arkansas", "conference": "SEC"},
        {"name": "University of Mississippi", "conference": "SEC"},
        {"name": "Mississippi State University", "conference": "SEC"},
        {"name": "University of Tennessee", "conference": "SEC"},
        {"name": "University of South Carolina", "conference": "SEC"},
        {"name": "University of Kentucky", "conference": "SEC"},
        {"name": "Texas A&M University", "conference": "SEC"},
        {"name": "University of Texas at Austin", "conference": "SEC"},
        {"name": "University of Oklahoma", "conference": "SEC"},
        {"name": "Oklahoma State University", "conference": "Big 12"},
        {"name": "Texas Christian University", "conference": "Big 12"},
        {"name": "Texas Tech University", "conference": "Big 12"},
        {"name": "Baylor University", "conference": "Big 12"},
        {"name": "University of Arizona", "conference": "Big 12"},
        {"name": "Arizona State University", "conference": "Big 12"},
        {"name": "West Virginia University", "conference": "Big 12"},
        {"name": "University of California, Los Angeles", "conference": "Big Ten"},
        {"name": "University of Oregon", "conference": "Big Ten"},
        {"name": "University of Michigan", "conference": "Big Ten"},
        {"name": "Indiana University Bloomington", "conference": "Big Ten"},
        {"name": "University of Maryland", "conference": "Big Ten"},
        {"name": "Rutgers University", "conference": "Big Ten"},
        {"name": "Coastal Carolina University", "conference": "Sun Belt"},
        {"name": "Southern Mississippi University", "conference": "Sun Belt"},
        {"name": "East Carolina University", "conference": "American"},
        {"name": "Dallas Baptist University", "conference": "Conference USA"},
        {"name": "Kent State University", "conference": "MAC"},
        {"name": "Stetson University", "conference": "ASUN"},
        {"name": "Jacksonville University", "conference": "ASUN"},
        {"name": "Campbell University", "conference": "CAA"},
        {"name": "Gonzaga University", "conference": "WCC"},
    ],
    "D2": [
        {"name": "University of Tampa", "conference": "Sunshine State"},
        {"name": "Nova Southeastern University", "conference": "Sunshine State"},
        {"name": "Rollins College", "conference": "Sunshine State"},
        {"name": "Florida Southern College", "conference": "Sunshine State"},
        {"name": "Lynn University", "conference": "Sunshine State"},
        {"name": "Saint Leo University", "conference": "Sunshine State"},
        {"name": "Barry University", "conference": "Sunshine State"},
        {"name": "Valdosta State University", "conference": "Gulf South"},
        {"name": "West Florida University", "conference": "Gulf South"},
        {"name": "Delta State University", "conference": "Gulf South"},
        {"name": "Columbus State University", "conference": "Peach Belt"},
        {"name": "Georgia College", "conference": "Peach Belt"},
        {"name": "Augusta University", "conference": "Peach Belt"},
        {"name": "Angelo State University", "conference": "Lone Star"},
        {"name": "Colorado Mesa University", "conference": "RMAC"},
        {"name": "Central Missouri University", "conference": "MIAA"},
        {"name": "Catawba College", "conference": "South Atlantic"},
        {"name": "Tusculum University", "conference": "South Atlantic"},
        {"name": "Cal State Fullerton Pomona", "conference": "CCAA"},
        {"name": "Seton Hill University", "conference": "PSAC"},
    ],
    "D3": [
        {"name": "Johns Hopkins University", "conference": "Centennial"},
        {"name": "Swarthmore College", "conference": "Centennial"},
        {"name": "Emory University", "conference": "UAA"},
        {"name": "Washington University in St. Louis", "conference": "UAA"},
        {"name": "Case Western Reserve University", "conference": "UAA"},
        {"name": "Massachusetts Institute of Technology", "conference": "NEWMAC"},
        {"name": "Tufts University", "conference": "NESCAC"},
        {"name": "Amherst College", "conference": "NESCAC"},
        {"name": "Williams College", "conference": "NESCAC"},
        {"name": "Trinity University", "conference": "SAA"},
        {"name": "Birmingham-Southern College", "conference": "SAA"},
        {"name": "Rowan University", "conference": "NJAC"},
        {"name": "Salisbury University", "conference": "CAC"},
        {"name": "Wisconsin-Whitewater University", "conference": "WIAC"},
        {"name": "Cortland State University", "conference": "SUNYAC"},
        {"name": "Denison University", "conference": "NCAC"},
        {"name": "Chapman University", "conference": "SCIAC"},
        {"name": "Pomona-Pitzer Colleges", "conference": "SCIAC"},
        {"name": "Methodist University", "conference": "USA South"},
        {"name": "Shenandoah University", "conference": "ODAC"},
    ],
}
