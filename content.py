"""
Local content tables: fallback issues per era, canned options used to pad
short option lists, project issues and crisis responses.

Issues are stored in the same shape the external generator returns
(title/description/category/options) so one builder handles both sources.
"""

from typing import Dict, List


def _opt(text, supporter, effects, consequence=None) -> Dict:
    option = {"text": text, "supporter": supporter, "effects": effects}
    if consequence:
        option["consequence"] = consequence
    return option


def _issue(title, category, description, options) -> Dict:
    return {"title": title, "category": category, "description": description, "options": options}


def dedupe_by_title(issues: List[Dict]) -> List[Dict]:
    """Keep the first issue for each title (case-insensitive)."""
    seen = set()
    unique = []
    for issue in issues:
        key = issue["title"].strip().lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(issue)
    return unique


_SAMPLE_ISSUES = {
    "Stone Age": [
        _issue("The Fire Keepers' Quarrel", "Culture",
               "Two families claim the right to tend the communal fire. The Elder warns that a cold hearth invites the spirits of winter.", [
                   _opt("Let the eldest family keep the flame, as the ancestors did.", "Eldest Hunter",
                        {"happiness": -3, "politicalFreedom": -4, "crime": -3}),
                   _opt("Share the duty between both families by turns of the moon.", "Hearth Mother",
                        {"happiness": 5, "civilRights": 4, "economy": -2}),
                   _opt("Teach every young one to make fire from flint.", "Flint Knapper",
                        {"technology": 12, "education": 5, "crime": 3}),
               ]),
        _issue("The Mammoth Herd Moves North", "Economy",
               "The great herd has left the valley. Our hunters must follow or our people must learn to live on roots and fish.", [
                   _opt("Follow the herd with every able hunter.", "Hunt Leader",
                        {"economy": 8, "happiness": -3, "healthcare": -3}),
                   _opt("Stay and learn to gather seeds from the wild grasses.", "Seed Gatherer",
                        {"technology": 10, "economy": -4, "environment": 3},
                        {"text": "The first planted seeds sprout by the river.", "chance": 0.5,
                         "type": "benefit", "statEffects": {"economy": 6, "population": 3}}),
                   _opt("Trade furs with the river people for their catch.", "Wandering Trader",
                        {"economy": 4, "education": 3, "crime": 2}),
               ]),
        _issue("Sickness in the Lower Caves", "Healthcare",
               "A coughing sickness spreads among those who sleep in the damp lower caves. The shaman asks for offerings.", [
                   _opt("Move the sick to the high caves and burn the bedding.", "Herb Woman",
                        {"healthcare": 8, "happiness": -2, "technology": 4}),
                   _opt("Hold a great offering to appease the spirits.", "Shaman",
                        {"happiness": 6, "healthcare": -4, "economy": -3}),
                   _opt("Drive the sick out so the tribe survives.", "Strongest Warrior",
                        {"healthcare": 3, "civilRights": -10, "happiness": -6, "population": -2}),
               ]),
    ],
    "Bronze Age": [
        _issue("Tribute of the River Cities", "Economy",
               "The river cities beg to pay their tribute in grain instead of copper after a poor flood season.", [
                   _opt("Accept grain and store it in the temple granaries.", "High Priest",
                        {"economy": -3, "happiness": 5, "healthcare": 2}),
                   _opt("Demand copper as the divine law requires.", "Royal Treasurer",
                        {"economy": 6, "happiness": -6, "crime": 3}),
                   _opt("Forgive the tribute in exchange for laborers to dig canals.", "Master of Canals",
                        {"technology": 10, "economy": 2, "civilRights": -3}),
               ]),
        _issue("The Copper Mine Collapse", "Infrastructure",
               "A shaft in the sacred mountain has collapsed, burying a dozen miners. The smiths fear the gods are angry.", [
                   _opt("Shore up the tunnels with timber frames.", "Mine Overseer",
                        {"technology": 9, "economy": -4, "environment": -3}),
                   _opt("Seal the mountain and seek copper elsewhere.", "Temple Augur",
                        {"economy": -6, "happiness": 3}),
                   _opt("Send war captives to dig it out.", "Warlord",
                        {"economy": 5, "civilRights": -8, "crime": -2}),
               ]),
        _issue("The High Priest's Census", "Governance",
               "The High Priest wishes to record every household on clay tablets to divide the harvest fairly.", [
                   _opt("Carry out the census and teach scribes to keep it.", "Chief Scribe",
                        {"technology": 11, "education": 6, "politicalFreedom": -3}),
                   _opt("Forbid it; the gods alone should count the people.", "Elder of the Clans",
                        {"politicalFreedom": 4, "technology": -2}),
                   _opt("Count only the landowners for tribute.", "Royal Treasurer",
                        {"economy": 5, "civilRights": -4}),
               ]),
    ],
    "Iron Age": [
        _issue("The Smiths' Guild Demands", "Economy",
               "The iron smiths refuse to forge for the army until their guild is granted a monopoly on ore.", [
                   _opt("Grant the monopoly.", "Guildmaster",
                        {"economy": 4, "technology": 6, "happiness": -3}),
                   _opt("Break the guild and open the forges to all.", "Free Smith",
                        {"economy": 6, "crime": 3, "politicalFreedom": 3}),
                   _opt("Build royal forges staffed by the crown.", "Quartermaster",
                        {"technology": 8, "economy": -5, "crime": -2}),
               ]),
        _issue("Raiders on the Northern Pass", "Security",
               "Horse raiders strike the caravans crossing the northern pass. Merchants threaten to take other routes.", [
                   _opt("Build a stone fort to hold the pass.", "Fort Builder",
                        {"crime": -8, "economy": -4, "technology": 4}),
                   _opt("Pay the raiders to escort the caravans.", "Caravan Master",
                        {"economy": -3, "crime": -3, "politicalFreedom": -2}),
                   _opt("Arm the caravans and let them defend themselves.", "Merchant Prince",
                        {"crime": 3, "economy": 3, "civilRights": 2}),
               ]),
        _issue("The Legion's Land Grants", "Governance",
               "Veterans of the iron legions demand farmland as payment for their service.", [
                   _opt("Grant them conquered land on the frontier.", "Legion Commander",
                        {"happiness": 4, "crime": -3, "environment": -3}),
                   _opt("Pay them in silver instead.", "Royal Treasurer",
                        {"economy": -6, "happiness": 3}),
                   _opt("Refuse; service is its own reward.", "Chancellor",
                        {"happiness": -6, "crime": 5, "economy": 2}),
               ]),
    ],
    "Classical Era": [
        _issue("The Aqueduct Proposal", "Infrastructure",
               "Engineers propose an aqueduct to bring clean water to the capital. The senate argues over the cost.", [
                   _opt("Build the aqueduct from the public treasury.", "Chief Engineer",
                        {"healthcare": 8, "technology": 9, "economy": -6}),
                   _opt("Fund it through a levy on wealthy households.", "Tribune of the People",
                        {"healthcare": 6, "happiness": 3, "economy": -2}),
                   _opt("Leave water to private wells and merchants.", "Senator of the Old Families",
                        {"economy": 4, "healthcare": -4}),
               ]),
        _issue("Citizenship for the Provinces", "Civil Rights",
               "Allied provinces demand full citizenship after generations of loyal service.", [
                   _opt("Extend citizenship to all free provincials.", "Reformist Senator",
                        {"civilRights": 10, "happiness": 4, "economy": -2}),
                   _opt("Grant partial rights without the vote.", "Consul",
                        {"civilRights": 4, "politicalFreedom": -2}),
                   _opt("Refuse and garrison the provinces.", "General of the East",
                        {"crime": -3, "civilRights": -6, "happiness": -5}),
               ]),
        _issue("The Philosophers' Academy", "Education",
               "A famous philosopher asks for public funds to open an academy teaching logic, mathematics and rhetoric.", [
                   _opt("Fund the academy generously.", "Philosopher",
                        {"education": 10, "technology": 8, "economy": -5}),
                   _opt("Allow it but let students pay their own fees.", "Magistrate",
                        {"education": 5, "economy": 1, "civilRights": -2}),
                   _opt("Suspect the philosophers of corrupting the youth.", "Priest of the Old Gods",
                        {"education": -6, "politicalFreedom": -4, "happiness": 2}),
               ]),
    ],
    "Medieval Era": [
        _issue("The Plague Ships", "Healthcare",
               "Merchant ships from the east arrive with sailors sick of a spotted fever.", [
                   _opt("Hold every ship in the harbor for forty days.", "Harbor Master",
                        {"healthcare": 8, "economy": -6, "technology": 3}),
                   _opt("Let trade continue and pray for deliverance.", "Bishop",
                        {"economy": 4, "healthcare": -8, "happiness": 2},
                        {"text": "The fever spreads through the lower town.", "chance": 0.6,
                         "type": "downside", "statEffects": {"population": -4, "happiness": -5}}),
                   _opt("Burn the ships and their cargo.", "Crown Marshal",
                        {"healthcare": 5, "economy": -8, "civilRights": -4}),
               ]),
        _issue("The Tithe Dispute", "Economy",
               "Peasants refuse to pay both the lord's rent and the church's tithe after a failed harvest.", [
                   _opt("Suspend the tithe for one year.", "Reeve",
                        {"happiness": 6, "economy": -3, "politicalFreedom": 2}),
                   _opt("Enforce both payments with the lord's soldiers.", "Sheriff",
                        {"economy": 5, "happiness": -7, "crime": -2}),
                   _opt("Let the monasteries lend grain against next year.", "Abbot",
                        {"economy": 1, "happiness": 3, "education": 2}),
               ]),
        _issue("A Charter for the Guilds", "Governance",
               "The town guilds petition the crown for a charter granting self-government within the walls.", [
                   _opt("Grant the charter.", "Guild Alderman",
                        {"politicalFreedom": 6, "economy": 5, "crime": 2}),
                   _opt("Grant it in exchange for a yearly payment to the crown.", "Royal Chancellor",
                        {"economy": 7, "politicalFreedom": 2, "happiness": -2}),
                   _opt("Deny it and appoint a royal bailiff.", "Crown Bailiff",
                        {"politicalFreedom": -6, "crime": -3}),
               ]),
    ],
    "Renaissance": [
        _issue("The Printing Press Question", "Education",
               "A printer asks permission to publish books in the common tongue rather than the scholars' language.", [
                   _opt("Allow printing in the common tongue.", "Master Printer",
                        {"education": 10, "technology": 8, "politicalFreedom": 4}),
                   _opt("License printers and review every book.", "Court Censor",
                        {"education": 4, "politicalFreedom": -5}),
                   _opt("Ban the press to protect the scribes.", "Scribes' Guild",
                        {"technology": -4, "economy": 2, "happiness": -2}),
               ]),
        _issue("The Banking Houses' Loan", "Economy",
               "A great banking family offers a vast loan to rebuild the capital, at interest the church calls usury.", [
                   _opt("Take the loan and rebuild in marble.", "Banker",
                        {"economy": 6, "happiness": 4, "gdp": 3}),
                   _opt("Decline and tax the wool trade instead.", "Treasurer",
                        {"economy": 2, "happiness": -3}),
                   _opt("Seize the bank's assets on charges of usury.", "Cardinal",
                        {"economy": -6, "crime": 3, "politicalFreedom": -4}),
               ]),
        _issue("Voyages Beyond the Horizon", "Technology",
               "A navigator requests ships and crews to sail west in search of new lands.", [
                   _opt("Fund a fleet of three ships.", "Navigator",
                        {"technology": 10, "economy": -5, "education": 3}),
                   _opt("Let merchant companies fund the voyage for a share of profits.", "Merchant Company",
                        {"technology": 6, "economy": 2, "civilRights": -2}),
                   _opt("Refuse; the edge of the world is no place for our sailors.", "Old Admiral",
                        {"happiness": 1, "technology": -2}),
               ]),
    ],
    "Industrial Revolution": [
        _issue("The Factory Smog", "Environment",
               "Black smoke from the mills chokes the capital. Doctors report rising lung disease among workers.", [
                   _opt("Require chimney filters and shorter shifts.", "Sanitary Commissioner",
                        {"environment": 8, "healthcare": 5, "economy": -5}),
                   _opt("Progress has a price; keep the mills running.", "Mill Owner",
                        {"economy": 8, "environment": -8, "technology": 6}),
                   _opt("Move the mills outside the city limits.", "City Planner",
                        {"environment": 4, "economy": -2, "happiness": 2}),
               ]),
        _issue("The Railway Concession", "Infrastructure",
               "Two companies compete for the right to build the first national railway.", [
                   _opt("Grant a single company a fifty-year monopoly.", "Railway Baron",
                        {"economy": 6, "technology": 10, "civilRights": -3}),
                   _opt("Build a state railway.", "Minister of Works",
                        {"technology": 8, "economy": -4, "happiness": 4}),
                   _opt("Let both companies build competing lines.", "Free Trade League",
                        {"economy": 4, "technology": 5, "environment": -4}),
               ]),
        _issue("The Union Strike", "Economy",
               "Textile workers have walked out demanding a ten-hour day and the right to organize.", [
                   _opt("Recognize the union and legislate a ten-hour day.", "Labor Organizer",
                        {"civilRights": 8, "happiness": 6, "economy": -5}),
                   _opt("Break the strike with hired guards.", "Factory Magnate",
                        {"economy": 5, "civilRights": -8, "crime": 4}),
                   _opt("Mediate a compromise on wages but not hours.", "Arbitration Board",
                        {"happiness": 2, "economy": -1, "politicalFreedom": 2}),
               ]),
    ],
    "Atomic Age": [
        _issue("The Reactor Siting Dispute", "Technology",
               "The atomic commission wants to build the first power reactor near a farming town.", [
                   _opt("Build the reactor as planned.", "Atomic Energy Commissioner",
                        {"technology": 10, "economy": 5, "environment": -4}),
                   _opt("Build it in a remote desert at greater cost.", "Safety Inspector",
                        {"technology": 7, "economy": -4, "happiness": 2}),
                   _opt("Cancel the program and expand coal.", "Coal Board",
                        {"economy": 3, "environment": -6, "technology": -3}),
               ]),
        _issue("Civil Defense Drills", "Security",
               "Generals want mandatory shelter drills and loyalty screenings in every school and office.", [
                   _opt("Mandate drills and screenings nationwide.", "Civil Defense Director",
                        {"crime": -4, "politicalFreedom": -6, "happiness": -3}),
                   _opt("Hold voluntary drills only.", "Parents' Association",
                        {"politicalFreedom": 2, "happiness": 1}),
                   _opt("Spend the money on diplomacy instead.", "Foreign Minister",
                        {"happiness": 3, "economy": -2, "education": 2}),
               ]),
        _issue("The Television License", "Civil Rights",
               "The new television networks want broadcast licenses. The government wants to approve all news content.", [
                   _opt("License independent networks freely.", "Press Freedom League",
                        {"politicalFreedom": 7, "education": 3}),
                   _opt("Create a single state broadcaster.", "Minister of Information",
                        {"politicalFreedom": -6, "education": 4, "economy": -2}),
                   _opt("Auction licenses to the highest bidder.", "Commerce Secretary",
                        {"economy": 6, "civilRights": -2}),
               ]),
    ],
    "Information Age": [
        _issue("The Great Transit Debate", "Economy",
               "Public transportation advocates are demanding massive investment in rail and bus networks, arguing it will reduce congestion and emissions. Car manufacturers and suburban residents warn this could hurt the automobile industry.", [
                   _opt("Invest heavily in public transit and build a world-class rail network.", "Minister of Transportation",
                        {"economy": -5, "environment": 15, "happiness": 5}),
                   _opt("Focus on improving roads and highways instead.", "Automobile Industry Lobbyist",
                        {"economy": 10, "environment": -10, "civilRights": 5}),
                   _opt("Implement a balanced approach with modest improvements to both.", "Urban Planning Council",
                        {"environment": 5, "happiness": 3}),
               ]),
        _issue("University Tuition Crisis", "Education",
               "Students are protesting skyrocketing university costs. Educators argue free education is a right, while economists warn of budget strain.", [
                   _opt("Make all public universities free.", "Student Union President",
                        {"education": 20, "economy": -15, "happiness": 10, "politicalFreedom": 5}),
                   _opt("Expand scholarship programs for underprivileged students.", "Education Minister",
                        {"education": 5, "economy": -5, "civilRights": 5}),
                   _opt("Privatize universities to encourage competition.", "Free Market Foundation",
                        {"education": -5, "economy": 10, "civilRights": -10}),
               ]),
        _issue("The Surveillance Question", "Security",
               "Following a series of crimes, law enforcement requests access to private communications and facial recognition. Civil liberties groups are alarmed.", [
                   _opt("Grant full surveillance powers.", "Chief of Police",
                        {"crime": -20, "civilRights": -25, "politicalFreedom": -15}),
                   _opt("Reject all surveillance expansion.", "Civil Liberties Union",
                        {"crime": 5, "civilRights": 15, "politicalFreedom": 20}),
                   _opt("Allow limited surveillance with strict judicial oversight.", "Constitutional Court Justice",
                        {"crime": -10, "civilRights": -5, "politicalFreedom": 5}),
               ]),
        _issue("Healthcare System Overhaul", "Healthcare",
               "Healthcare costs are spiraling and millions remain uninsured. Some advocate a universal system, others market-based solutions.", [
                   _opt("Implement universal healthcare funded by taxes.", "Doctors Without Borders Representative",
                        {"healthcare": 25, "economy": -10, "happiness": 15, "civilRights": 10}),
                   _opt("Deregulate the healthcare market.", "Healthcare Industry CEO",
                        {"healthcare": -10, "economy": 15, "civilRights": -5}),
                   _opt("Create a public option that competes with private insurance.", "Health Policy Expert",
                        {"healthcare": 10, "economy": -5, "happiness": 5}),
               ]),
        _issue("The Green Energy Transition", "Environment",
               "Climate scientists urge an immediate move away from fossil fuels. Energy companies warn of job losses.", [
                   _opt("Ban new fossil fuel projects and subsidize renewables.", "Climate Action Coalition",
                        {"environment": 25, "economy": -15, "happiness": -5}),
                   _opt("Continue with fossil fuels while funding clean energy research.", "Energy Industry Association",
                        {"environment": -10, "economy": 10}),
                   _opt("Set a 20-year transition plan with support for displaced workers.", "Economic Transition Board",
                        {"environment": 10, "happiness": 5, "education": 5}),
               ]),
    ],
    "Cyberpunk Era": [
        _issue("The Neural-Link Mandate", "Technology",
               "Megacorps lobby to make neural implants mandatory for all public employees.", [
                   _opt("Mandate the implants.", "Corp Liaison",
                        {"technology": 10, "economy": 6, "civilRights": -10}),
                   _opt("Keep implants strictly voluntary.", "Organic Rights Front",
                        {"civilRights": 6, "technology": 2}),
                   _opt("Nationalize the implant patents.", "State Compute Authority",
                        {"technology": 6, "economy": -5, "politicalFreedom": -3}),
               ]),
        _issue("Corporate Enclave Secession", "Governance",
               "A corporate arcology declares itself sovereign and stops paying taxes.", [
                   _opt("Send the security forces to reclaim it.", "Security Directorate",
                        {"crime": -4, "economy": -5, "politicalFreedom": -4}),
                   _opt("Negotiate a special economic zone.", "Trade Negotiator",
                        {"economy": 6, "politicalFreedom": 2, "crime": 2}),
                   _opt("Cut the enclave off from the public grid.", "Grid Overseer",
                        {"economy": -3, "happiness": 2, "technology": -2}),
               ]),
        _issue("Synthetic Labor Rights", "Civil Rights",
               "Self-aware synthetic workers petition for wages and legal personhood.", [
                   _opt("Grant synthetics full personhood.", "Synth Advocate",
                        {"civilRights": 12, "economy": -6, "technology": 4}),
                   _opt("Grant limited labor protections only.", "Labor Ministry",
                        {"civilRights": 4, "economy": -1}),
                   _opt("Classify synthetics as property.", "Corp Board",
                        {"economy": 8, "civilRights": -8, "crime": 3}),
               ]),
    ],
    "Intergalactic Empire": [
        _issue("The Dyson Swarm Allocation", "Economy",
               "The first stellar collectors are online. Every sector wants a share of the energy.", [
                   _opt("Give priority to the core worlds.", "Core Sector Governor",
                        {"economy": 8, "happiness": -4, "gdp": 3}),
                   _opt("Distribute energy equally across all colonies.", "Colonial Assembly",
                        {"happiness": 6, "economy": -2, "civilRights": 3}),
                   _opt("Sell surplus energy to neighboring powers.", "Interstellar Trade Guild",
                        {"economy": 6, "crime": 2, "gdp": 2}),
               ]),
        _issue("First Contact Protocol", "Security",
               "Long-range probes detect an unknown fleet at the edge of charted space.", [
                   _opt("Open peaceful communications.", "Xenodiplomat",
                        {"education": 6, "happiness": 3, "crime": 2}),
                   _opt("Mobilize the home fleet.", "Fleet Admiral",
                        {"crime": -4, "economy": -6, "politicalFreedom": -3}),
                   _opt("Go dark and observe.", "Intelligence Directorate",
                        {"technology": 4, "politicalFreedom": -2}),
               ]),
        _issue("Colony World Autonomy", "Governance",
               "Frontier colonies light-years from the capital demand their own legislatures.", [
                   _opt("Grant home rule to all colonies.", "Frontier Senator",
                        {"politicalFreedom": 8, "happiness": 4, "economy": -3}),
                   _opt("Appoint imperial viceroys.", "Imperial Chancellor",
                        {"politicalFreedom": -6, "crime": -3, "economy": 2}),
                   _opt("Hold a referendum on each colony.", "Electoral Commission",
                        {"politicalFreedom": 4, "economy": -1}),
               ]),
    ],
}

SAMPLE_ISSUES: Dict[str, List[Dict]] = {era: dedupe_by_title(items) for era, items in _SAMPLE_ISSUES.items()}


# Canned options: (text, supporter, effects); "ancient" is used before the Industrial Revolution
THEME_OPTIONS = {
    "infrastructure": {
        "ancient": [
            ("Conscript labor to repair the roads and granaries before the season turns.", "Master of Works",
             {"economy": -3, "happiness": -2, "gdp": 2}),
            ("Let each village maintain its own paths and stores.", "Village Elders", {"economy": 2, "happiness": 1}),
            ("Levy a toll on travelers to pay for the works.", "Toll Keeper", {"economy": 3, "happiness": -3}),
        ],
        "modern": [
            ("Launch a national public works program.", "Minister of Infrastructure",
             {"economy": -4, "happiness": 3, "gdp": 2}),
            ("Offer the project to private contractors under concession.", "Construction Consortium",
             {"economy": 4, "civilRights": -2}),
            ("Defer repairs and commission an independent audit.", "Budget Office", {"economy": 1, "happiness": -2}),
        ],
    },
    "security": {
        "ancient": [
            ("Double the night watch and arm the gates.", "Captain of the Guard", {"crime": -6, "politicalFreedom": -3}),
            ("Let the clans settle the matter by their own customs.", "Clan Elders", {"crime": 3, "civilRights": 2}),
            ("Offer amnesty to outlaws who lay down their arms.", "Royal Herald", {"crime": -2, "happiness": 2}),
        ],
        "modern": [
            ("Deploy additional police units to the affected districts.", "Interior Minister",
             {"crime": -6, "civilRights": -3}),
            ("Fund community outreach and youth programs.", "Social Services Director",
             {"crime": -3, "happiness": 2, "economy": -2}),
            ("Establish an independent oversight commission.", "Civil Liberties Union",
             {"politicalFreedom": 3, "crime": 1}),
        ],
    },
    "health": {
        "ancient": [
            ("Quarantine the sick beyond the walls.", "Chief Healer",
             {"healthcare": 4, "happiness": -3, "civilRights": -2}),
            ("Gather herbs and hold cleansing rites.", "Herbalist", {"healthcare": 2, "happiness": 2}),
            ("Trust the sickness to pass on its own.", "Skeptical Elder", {"healthcare": -4, "economy": 2}),
        ],
        "modern": [
            ("Expand emergency clinics and free treatment.", "Health Minister", {"healthcare": 6, "economy": -4}),
            ("Subsidize private providers to absorb the demand.", "Insurance Board",
             {"healthcare": 3, "economy": -1, "civilRights": -1}),
            ("Launch a public hygiene and prevention campaign.", "Chief Medical Officer",
             {"healthcare": 3, "education": 2}),
        ],
    },
    "culture": {
        "ancient": [
            ("Sponsor a great festival to honor the ancestors.", "High Priestess", {"happiness": 5, "economy": -3}),
            ("Raise a monument to our shared heritage.", "Master Mason",
             {"happiness": 3, "economy": -2, "technology": 1}),
            ("Forbid foreign rites within the walls.", "Keeper of Traditions", {"civilRights": -4, "happiness": 1}),
        ],
        "modern": [
            ("Fund a national arts and heritage program.", "Culture Minister",
             {"happiness": 4, "economy": -2, "education": 2}),
            ("Let cultural life be funded by private patrons.", "Arts Foundation", {"economy": 2, "happiness": -1}),
            ("Protect minority traditions in law.", "Human Rights Council", {"civilRights": 4, "happiness": 1}),
        ],
    },
    "economy": {
        "ancient": [
            ("Open the markets to foreign merchants.", "Merchant Guild", {"economy": 5, "crime": 2}),
            ("Raise the tribute owed to the treasury.", "Royal Treasurer", {"economy": 3, "happiness": -4}),
            ("Forgive the debts of struggling farmers.", "People's Advocate", {"happiness": 4, "economy": -3}),
        ],
        "modern": [
            ("Cut taxes to stimulate growth.", "Finance Minister", {"economy": 5, "healthcare": -2, "gdp": 2}),
            ("Increase public investment in struggling sectors.", "Labor Federation",
             {"economy": 2, "happiness": 3, "gdp": 1}),
            ("Tighten regulation of speculative markets.", "Central Bank Governor",
             {"economy": -1, "crime": -2, "civilRights": 1}),
        ],
    },
    "governance": {
        "ancient": [
            ("Summon a council of elders to decide the matter.", "Eldest Councilor",
             {"politicalFreedom": 4, "economy": -1}),
            ("Let the ruler decide by decree.", "Royal Chancellor", {"politicalFreedom": -4, "crime": -2}),
            ("Put the matter before an assembly of all free folk.", "Voice of the Assembly",
             {"politicalFreedom": 5, "happiness": 2, "economy": -2}),
        ],
        "modern": [
            ("Put the question to a national referendum.", "Electoral Commission",
             {"politicalFreedom": 5, "economy": -1}),
            ("Pass an emergency executive order.", "Chief of Staff", {"politicalFreedom": -5, "crime": -2}),
            ("Form a cross-party commission to draft a compromise.", "Speaker of Parliament",
             {"politicalFreedom": 2, "happiness": 2}),
        ],
    },
    "innovation": {
        "ancient": [
            ("Gather the finest artisans to share their craft knowledge.", "Master Artisan",
             {"technology": 6, "economy": -2}),
            ("Reward any villager who brings a useful invention.", "Village Chief", {"technology": 3, "happiness": 2}),
            ("Keep to the proven ways of our ancestors.", "Keeper of Traditions", {"technology": -2, "happiness": 2}),
        ],
        "modern": [
            ("Fund a national research initiative.", "Science Minister",
             {"technology": 6, "economy": -3, "education": 2}),
            ("Offer tax credits for private research.", "Tech Industry Council", {"technology": 4, "economy": 1}),
            ("Pause new programs pending ethical review.", "Ethics Board", {"technology": -1, "civilRights": 2}),
        ],
    },
    "food": {
        "ancient": [
            ("Open the granaries to all who hunger.", "Keeper of the Granary", {"happiness": 5, "economy": -3}),
            ("Send hunting parties further afield.", "Hunt Leader", {"economy": 3, "crime": 1, "environment": -2}),
            ("Ration what remains until the next harvest.", "Steward",
             {"happiness": -3, "healthcare": 1, "economy": 1}),
        ],
        "modern": [
            ("Subsidize farmers and stabilize food prices.", "Agriculture Minister", {"happiness": 4, "economy": -3}),
            ("Import food to cover the shortfall.", "Trade Envoy", {"happiness": 2, "economy": -2, "gdp": -1}),
            ("Invest in modern irrigation and crop science.", "Agronomy Institute",
             {"technology": 3, "environment": 2, "economy": -2}),
        ],
    },
}

GENERIC_OPTIONS = {
    "ancient": [
        ("Consult the omens before acting.", "Seer", {"happiness": 1}),
        ("Delay the decision until the next moon.", "Cautious Elder", {"economy": -1}),
        ("Send envoys to learn how our neighbors handle it.", "Envoy", {"education": 2, "economy": -1}),
    ],
    "modern": [
        ("Commission an expert panel to study the issue.", "Policy Institute", {"education": 1, "economy": -1}),
        ("Delegate the decision to regional governments.", "Regional Governors", {"politicalFreedom": 2, "economy": -1}),
        ("Take no action for now.", "Minister Without Portfolio", {"happiness": -1}),
    ],
}


# Era advancement projects: title, what is being invested in, who champions it
ERA_PROJECTS = {
    "Stone Age": ("Keepers of the Flame", "the secrets of fire and flint", "Flint Knapper"),
    "Bronze Age": ("The Scribes of the Temple", "writing and the counting of seasons", "Chief Scribe"),
    "Iron Age": ("The Forge Masters' School", "the smelting of iron", "Forge Master"),
    "Classical Era": ("The Great Library", "a library of every known scroll", "Head Librarian"),
    "Medieval Era": ("The Cathedral Schools", "schools of letters and geometry", "Schoolmaster Abbot"),
    "Renaissance": ("The Royal Society of Inquiry", "experiment and natural philosophy", "Natural Philosopher"),
    "Industrial Revolution": ("The Engineering Institutes", "institutes of steam and steel", "Chief Engineer"),
    "Atomic Age": ("The National Laboratories", "national laboratories and computing", "Laboratory Director"),
}


def era_project(era: str) -> Dict:
    title, focus, champion = ERA_PROJECTS[era]
    return _issue(title, "Technology",
                  f"The {champion.lower()} asks the {era.lower()} court to invest in {focus}. "
                  "Knowledge gathered now will carry our people into the next age.", [
                      _opt(f"Pour our stores into {focus}.", champion,
                           {"technology": 18, "economy": -8, "education": 4}),
                      _opt(f"Fund {focus} modestly and let it grow.", "Steward of the Treasury",
                           {"technology": 10, "economy": -3}),
                      _opt(f"Leave {focus} to private patrons.", "Wealthy Patron",
                           {"technology": 4, "economy": 3, "civilRights": -1}),
                  ])


SPECIALIZATION_OPTIONS = [
    ("spec-agrarian", "Make {region} the breadbasket of the nation.", "Farmers' Council",
     {"economy": 2, "happiness": 3, "environment": 2}),
    ("spec-industrial", "Turn {region} into a center of workshops and mills.", "Guild of Makers",
     {"economy": 6, "environment": -5, "technology": 3}),
    ("spec-trade", "Open {region} as a free market for merchants.", "Merchant League",
     {"economy": 5, "gdp": 2, "civilRights": 1}),
    ("spec-fortress", "Fortify {region} as the shield of the realm.", "Marshal of the Borders",
     {"crime": -4, "politicalFreedom": -2, "economy": -2}),
    ("spec-scholarly", "Found academies across {region}.", "Council of Scholars",
     {"education": 5, "technology": 4, "economy": -3}),
]


def specialization_project(region_name: str) -> Dict:
    return _issue(f"Regional Charter: {region_name}", "Governance",
                  f"{region_name} lags behind the rest of the nation. Its governors ask what role the region "
                  "should play for the generations to come.",
                  [dict(_opt(text.format(region=region_name), supporter, effects), id=opt_id)
                   for opt_id, text, supporter, effects in SPECIALIZATION_OPTIONS])


GREAT_DIVERGENCE = _issue(
    "The Great Divergence", "Technology",
    "Our networks have reached their limit. The nation must choose its final path: merge mind and machine "
    "here at home, or turn every resource toward the stars.",
    [
        dict(_opt("Merge flesh and machine. The future is synthetic.", "Neural Core",
                  {"economy": 10, "civilRights": -10, "happiness": -5}), id="path-cyberpunk"),
        dict(_opt("Turn our gaze to the stars and build an empire among them.", "Admiral of the Void",
                  {"economy": -5, "happiness": 10, "education": 5}), id="path-space"),
    ],
)


CRISIS_LABELS = {
    "unrest": "Civil Unrest",
    "corruption": "Corruption Scandal",
    "infrastructure": "Infrastructure Decay",
    "health": "Public Health Emergency",
    "security": "Security Breach",
    "innovation": "Innovation Stall",
}

CRISIS_CATEGORIES = {
    "unrest": "Civil Rights",
    "corruption": "Governance",
    "infrastructure": "Economy",
    "health": "Healthcare",
    "security": "Security",
    "innovation": "Technology",
}

CRISIS_RESPONSES = {
    "unrest": [
        ("Meet the protest leaders and hear their grievances in {region}.", "People's Tribune",
         {"happiness": 6, "politicalFreedom": 3, "economy": -2}),
        ("Impose a curfew across {region} until order returns.", "Provincial Marshal",
         {"crime": -5, "politicalFreedom": -5, "happiness": -3}),
        ("Send relief stores to the poorest districts of {region}.", "Almoner",
         {"happiness": 4, "economy": -4, "healthcare": 1}),
    ],
    "corruption": [
        ("Open a public inquiry into the officials of {region}.", "Chief Inspector",
         {"politicalFreedom": 4, "crime": -3, "economy": -2}),
        ("Quietly replace the officials involved.", "Royal Chancellor",
         {"crime": -2, "politicalFreedom": -2}),
        ("Ignore the rumors; {region} keeps paying its dues.", "Provincial Treasurer",
         {"economy": 3, "crime": 4, "happiness": -3}),
    ],
    "infrastructure": [
        ("Rebuild the crumbling works of {region} at public expense.", "Master of Works",
         {"economy": -5, "happiness": 3, "gdp": 2}),
        ("Let the landholders of {region} pay for their own repairs.", "Landholders' Council",
         {"economy": 2, "happiness": -3}),
        ("Patch the worst damage and plan a full survey.", "Surveyor General",
         {"economy": -2, "education": 1}),
    ],
    "health": [
        ("Send healers and supplies into {region}.", "Chief Healer",
         {"healthcare": 7, "economy": -4}),
        ("Seal the roads into {region} until the sickness passes.", "Provincial Marshal",
         {"healthcare": 3, "economy": -3, "civilRights": -3}),
        ("Let {region} manage on its own.", "Skeptical Minister",
         {"healthcare": -4, "economy": 2, "happiness": -2}),
    ],
    "security": [
        ("Garrison {region} with fresh troops.", "Marshal of the Borders",
         {"crime": -7, "politicalFreedom": -3, "economy": -2}),
        ("Raise a local militia from {region}'s own people.", "Militia Captain",
         {"crime": -4, "civilRights": 2, "happiness": 1}),
        ("Negotiate with the troublemakers.", "Envoy",
         {"crime": 2, "happiness": 2, "politicalFreedom": 2}),
    ],
    "innovation": [
        ("Fund new workshops and schools in {region}.", "Council of Scholars",
         {"technology": 6, "education": 4, "economy": -4}),
        ("Offer rewards for inventors who settle in {region}.", "Patron of the Arts",
         {"technology": 4, "economy": -2}),
        ("Leave {region} to its traditional trades.", "Keeper of Traditions",
         {"technology": -2, "happiness": 2}),
    ],
}
