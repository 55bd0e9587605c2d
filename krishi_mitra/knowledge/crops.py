# Crop reference data. Treatment order matters: the first entry is used when a
# detected disease has no exact treatment.
CROP_DATABASE = {
    "banana": {
        "diseases": ["leaf spot", "panama disease", "black sigatoka"],
        "pests": ["aphids", "nematodes", "thrips"],
        "seasons": {"plant": "June-July", "harvest": "April-May"},
        "treatments": {
            "leaf spot": "Copper oxychloride 0.3% or Mancozeb 0.2%",
            "black sigatoka": "Propiconazole 0.1%",
        },
    },
    "rice": {
        "diseases": ["blast", "brown spot", "sheath blight"],
        "pests": ["stem borer", "brown planthopper", "leaf folder"],
        "seasons": {"plant": "May-June, Nov-Dec", "harvest": "Sep-Oct, Mar-Apr"},
        "treatments": {
            "blast": "Tricyclazole 0.06% or Carbendazim 0.1%",
            "brown spot": "Mancozeb 0.2%",
        },
    },
    "tomato": {
        "diseases": ["late blight", "early blight", "bacterial wilt"],
        "pests": ["whitefly", "fruit borer", "aphids"],
        "seasons": {"plant": "Oct-Nov, Jan-Feb", "harvest": "Dec-Jan, Apr-May"},
        "treatments": {
            "late blight": "Metalaxyl + Mancozeb 0.2%",
            "early blight": "Chlorothalonil 0.2%",
        },
    },
}

# Shown once a crop is known; the calendar data carries no dates to derive it from.
DEFAULT_NEXT_ACTIVITY = "Apply fertilizer in 2 weeks"
